"""Friendship repository with specialized queries."""

from typing import Sequence
from uuid import UUID

from sqlalchemy import and_, or_, select

from ensgraph.core.types import FriendshipStatus
from ensgraph.db.models.friendship import FriendshipModel
from ensgraph.db.repositories.base import BaseRepository


class FriendshipRepository(BaseRepository[FriendshipModel]):
    """Repository for Friendship entities."""

    model = FriendshipModel

    async def find_between(self, user_a: UUID, user_b: UUID) -> FriendshipModel | None:
        """Find the friendship between two users in either direction."""
        stmt = select(FriendshipModel).where(
            or_(
                and_(
                    FriendshipModel.initiator_id == user_a,
                    FriendshipModel.receiver_id == user_b,
                ),
                and_(
                    FriendshipModel.initiator_id == user_b,
                    FriendshipModel.receiver_id == user_a,
                ),
            )
        )
        result = await self._session.execute(stmt)
        return result.unique().scalars().first()

    async def list_by_status(self, status: FriendshipStatus) -> Sequence[FriendshipModel]:
        """List friendships in the given state, initiator and receiver loaded."""
        stmt = (
            select(FriendshipModel)
            .where(FriendshipModel.status == status)
            .order_by(FriendshipModel.created_at)
        )
        result = await self._session.execute(stmt)
        return result.unique().scalars().all()
