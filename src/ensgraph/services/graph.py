"""Graph service: users and accepted friendships as node/edge data."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ensgraph.cache.decorators import cached
from ensgraph.cache.keys import CacheKeys
from ensgraph.core.models import GraphData, GraphEdge, GraphNode
from ensgraph.core.types import FriendshipStatus
from ensgraph.db.repositories.friendship import FriendshipRepository
from ensgraph.db.repositories.user import UserRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from ensgraph.cache.client import AsyncRedisClient


class GraphService:
    """Builds the friendship network for visualization."""

    def __init__(
        self,
        session: "AsyncSession",
        cache: "AsyncRedisClient | None" = None,
        cache_ttl: int = 600,
    ) -> None:
        self._users = UserRepository(session)
        self._friendships = FriendshipRepository(session)
        self._cache = cache
        self._cache_ttl = cache_ttl

    @cached(CacheKeys.graph, model=GraphData)
    async def get_graph(self) -> GraphData:
        """Return every user as a node and every accepted friendship as an edge."""
        users = await self._users.list()
        friendships = await self._friendships.list_by_status(FriendshipStatus.ACCEPTED)

        nodes = [
            GraphNode(id=user.ens_name, label=user.ens_name, image=user.avatar)
            for user in users
        ]
        edges = [
            GraphEdge(
                id=str(friendship.id),
                from_=friendship.initiator.ens_name,
                to=friendship.receiver.ens_name,
            )
            for friendship in friendships
        ]

        return GraphData(nodes=nodes, edges=edges)
