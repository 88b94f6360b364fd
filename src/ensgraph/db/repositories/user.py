"""User repository with specialized queries."""

from sqlalchemy import select

from ensgraph.db.models.user import UserModel
from ensgraph.db.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserModel]):
    """Repository for User entities."""

    model = UserModel

    async def get_by_ens_name(self, ens_name: str) -> UserModel | None:
        """Find a user by normalized ENS name."""
        stmt = select(UserModel).where(UserModel.ens_name == ens_name)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(
        self,
        ens_name: str,
        address: str,
        avatar: str | None = None,
    ) -> tuple[UserModel, bool]:
        """
        Get an existing user or create a new one.

        Returns tuple of (user, created) where created is True if new.
        """
        existing = await self.get_by_ens_name(ens_name)
        if existing:
            return existing, False

        user = UserModel(ens_name=ens_name, address=address, avatar=avatar)
        await self.create(user)
        return user, True
