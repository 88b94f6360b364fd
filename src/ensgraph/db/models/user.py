"""User database model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ensgraph.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from ensgraph.db.models.friendship import FriendshipModel


class UserModel(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    An ENS name that takes part in the friendship graph.

    Rows are only created once the name has resolved on-chain, so
    ``address`` is always set.
    """

    __tablename__ = "users"

    ens_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Trimmed, lowercased ENS name",
    )
    address: Mapped[str] = mapped_column(String(42), nullable=False)
    avatar: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    # Friendships go with the user in both directions
    initiated_friendships: Mapped[list["FriendshipModel"]] = relationship(
        "FriendshipModel",
        foreign_keys="FriendshipModel.initiator_id",
        back_populates="initiator",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    received_friendships: Mapped[list["FriendshipModel"]] = relationship(
        "FriendshipModel",
        foreign_keys="FriendshipModel.receiver_id",
        back_populates="receiver",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, ens_name='{self.ens_name}')>"
