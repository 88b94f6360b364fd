"""FastAPI dependency injection."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, Request

from ensgraph.cache.decorators import wait_for_invalidations

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from ensgraph.cache.client import AsyncRedisClient
    from ensgraph.config import EnsGraphSettings
    from ensgraph.resolution.resolver import ENSResolver
    from ensgraph.services.friendship import FriendshipService
    from ensgraph.services.graph import GraphService
    from ensgraph.services.profile import ProfileService


def get_settings(request: Request) -> EnsGraphSettings:
    """Get the settings the application was created with."""
    return request.app.state.settings


async def get_db_session(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Get database session from app state.

    Yields a session that is committed after the request, or rolled back if
    the handler raised. Cache entries made stale by the request are dropped
    once the commit has gone through.
    """
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        await wait_for_invalidations(session)


async def get_cache_client(request: Request) -> AsyncRedisClient | None:
    """Get Redis cache client from app state."""
    return getattr(request.app.state, "cache_client", None)


async def get_ens_resolver(request: Request) -> ENSResolver:
    """Get the process-wide ENS resolver from app state."""
    return request.app.state.ens_resolver


async def get_profile_service(
    resolver: ENSResolver = Depends(get_ens_resolver),
    cache: AsyncRedisClient | None = Depends(get_cache_client),
    settings: EnsGraphSettings = Depends(get_settings),
) -> ProfileService:
    """Get profile service with all dependencies."""
    from ensgraph.services.profile import ProfileService

    return ProfileService(resolver=resolver, cache=cache, cache_ttl=settings.cache_ttl)


async def get_friendship_service(
    session: AsyncSession = Depends(get_db_session),
    resolver: ENSResolver = Depends(get_ens_resolver),
    cache: AsyncRedisClient | None = Depends(get_cache_client),
) -> FriendshipService:
    """Get friendship service with all dependencies."""
    from ensgraph.services.friendship import FriendshipService

    return FriendshipService(session=session, resolver=resolver, cache=cache)


async def get_graph_service(
    session: AsyncSession = Depends(get_db_session),
    cache: AsyncRedisClient | None = Depends(get_cache_client),
    settings: EnsGraphSettings = Depends(get_settings),
) -> GraphService:
    """Get graph service with all dependencies."""
    from ensgraph.services.graph import GraphService

    return GraphService(session=session, cache=cache, cache_ttl=settings.cache_ttl)


# Type aliases for cleaner dependency injection
Profiles = Annotated["ProfileService", Depends(get_profile_service)]
Friendships = Annotated["FriendshipService", Depends(get_friendship_service)]
Graph = Annotated["GraphService", Depends(get_graph_service)]
