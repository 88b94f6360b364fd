"""Friendship database model."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import CheckConstraint, Enum, ForeignKey, Index, String, Uuid, event
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ensgraph.core.types import FriendshipStatus
from ensgraph.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from ensgraph.db.models.user import UserModel


class FriendshipModel(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    Directed friendship edge between two users.

    Direction only records who initiated it; for graph purposes the edge is
    undirected and at most one row exists per pair of users.
    """

    __tablename__ = "friendships"

    initiator_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    receiver_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[FriendshipStatus] = mapped_column(
        Enum(
            FriendshipStatus,
            name="friendship_status",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=FriendshipStatus.PENDING,
    )
    # Both ids in sorted order, so a pair is unique whichever side initiated
    pair_key: Mapped[str] = mapped_column(String(73), unique=True, nullable=False)

    initiator: Mapped[UserModel] = relationship(
        UserModel,
        foreign_keys=[initiator_id],
        back_populates="initiated_friendships",
        lazy="joined",
    )
    receiver: Mapped[UserModel] = relationship(
        UserModel,
        foreign_keys=[receiver_id],
        back_populates="received_friendships",
        lazy="joined",
    )

    __table_args__ = (
        CheckConstraint("initiator_id <> receiver_id", name="no_self_friendship"),
        Index("ix_friendships_receiver_id", "receiver_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<FriendshipModel(id={self.id}, initiator_id={self.initiator_id}, "
            f"receiver_id={self.receiver_id}, status='{self.status}')>"
        )

    @staticmethod
    def pair_key_for(user_a: UUID, user_b: UUID) -> str:
        return ":".join(sorted((str(user_a), str(user_b))))


@event.listens_for(FriendshipModel, "before_insert")
def _set_pair_key(mapper, connection, target: FriendshipModel) -> None:
    target.pair_key = FriendshipModel.pair_key_for(target.initiator_id, target.receiver_id)
