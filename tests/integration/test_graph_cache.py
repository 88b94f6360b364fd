"""Integration tests for graph cache invalidation around commits."""

from __future__ import annotations

import pytest

from ensgraph.cache.decorators import wait_for_invalidations
from ensgraph.cache.keys import CacheKeys
from ensgraph.db.session import DatabaseManager
from ensgraph.services.friendship import FriendshipService
from ensgraph.services.graph import GraphService

pytestmark = [pytest.mark.integration]

EMPTY_GRAPH = {"nodes": [], "edges": []}


class TestGraphInvalidation:
    """The cached graph is dropped only once a write is committed."""

    async def test_read_during_write_is_not_served_after_commit(
        self, db_session_factory, ens_resolver, memory_cache
    ):
        """A graph cached between flush and commit does not outlive the commit."""
        async with db_session_factory() as writer:
            await FriendshipService(writer, ens_resolver, memory_cache).create(
                "alice.eth", "bob.eth"
            )

            async with db_session_factory() as reader:
                during = await GraphService(reader, memory_cache).get_graph()
            assert during.edges == []
            assert CacheKeys.graph() in memory_cache.store

            await writer.commit()
            await wait_for_invalidations(writer)

        async with db_session_factory() as reader:
            after = await GraphService(reader, memory_cache).get_graph()

        assert len(after.edges) == 1
        assert after.edges[0].from_ == "alice.eth"

    async def test_key_kept_until_commit(self, db_session_factory, ens_resolver, memory_cache):
        await memory_cache.set(CacheKeys.graph(), EMPTY_GRAPH)

        async with db_session_factory() as writer:
            await FriendshipService(writer, ens_resolver, memory_cache).create(
                "alice.eth", "bob.eth"
            )
            assert CacheKeys.graph() in memory_cache.store

            await writer.commit()
            await wait_for_invalidations(writer)

        assert CacheKeys.graph() not in memory_cache.store

    async def test_rollback_keeps_cached_graph(
        self, db_session_factory, ens_resolver, memory_cache
    ):
        await memory_cache.set(CacheKeys.graph(), EMPTY_GRAPH)

        async with db_session_factory() as writer:
            await FriendshipService(writer, ens_resolver, memory_cache).create(
                "alice.eth", "bob.eth"
            )
            await writer.rollback()
            await writer.commit()
            await wait_for_invalidations(writer)

        assert await memory_cache.get(CacheKeys.graph()) == EMPTY_GRAPH

    async def test_session_scope_waits_for_invalidation(
        self, database: DatabaseManager, ens_resolver, memory_cache, sample_friendship
    ):
        await memory_cache.set(CacheKeys.graph(), EMPTY_GRAPH)

        async with database.session() as session:
            await FriendshipService(session, ens_resolver, memory_cache).delete_user("alice.eth")
            assert CacheKeys.graph() in memory_cache.store

        assert CacheKeys.graph() not in memory_cache.store
