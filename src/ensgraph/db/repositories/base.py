"""Base repository with generic CRUD operations."""

from typing import Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ensgraph.db.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Generic async repository with CRUD operations."""

    model: type[T]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> T | None:
        """Get a single entity by ID."""
        return await self._session.get(self.model, id)

    async def list(
        self,
        *,
        offset: int = 0,
        limit: int | None = None,
    ) -> Sequence[T]:
        """List entities, optionally paginated."""
        stmt = select(self.model).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return result.unique().scalars().all()

    async def count(self) -> int:
        """Count all entities."""
        stmt = select(func.count()).select_from(self.model)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def create(self, entity: T) -> T:
        """Create a new entity."""
        self._session.add(entity)
        await self._session.flush()
        await self._session.refresh(entity)
        return entity

    async def delete(self, entity: T) -> None:
        """Delete an entity through the ORM so relationship cascades apply."""
        await self._session.delete(entity)
        await self._session.flush()
