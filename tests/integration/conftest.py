"""Integration test fixtures for the database and the HTTP API."""

from __future__ import annotations

import os
from typing import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ensgraph.core.types import FriendshipStatus
from ensgraph.db.models.friendship import FriendshipModel
from ensgraph.db.models.user import UserModel
from ensgraph.db.session import DatabaseManager

# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def database_url(tmp_path) -> str:
    """Get test database URL from environment or use a throwaway SQLite file."""
    return os.getenv(
        "TEST_DATABASE_URL",
        f"sqlite+aiosqlite:///{tmp_path / 'ensgraph_test.db'}",
    )


@pytest.fixture
async def database(database_url: str) -> AsyncIterator[DatabaseManager]:
    """
    Create a fresh database manager for each test.

    Tables are created up front; rows are removed afterwards so a shared
    PostgreSQL test database stays clean between tests.
    """
    manager = DatabaseManager(database_url)
    await manager.create_all()

    yield manager

    async with manager.engine.begin() as conn:
        await conn.execute(text("DELETE FROM friendships"))
        await conn.execute(text("DELETE FROM users"))

    await manager.close()


@pytest.fixture
def db_session_factory(database: DatabaseManager) -> async_sessionmaker[AsyncSession]:
    return database.session_factory


@pytest.fixture
async def db_session(db_session_factory) -> AsyncIterator[AsyncSession]:
    """Get a database session; data is committed so it is visible to the API."""
    async with db_session_factory() as session:
        yield session


# ============================================================================
# Sample Data Fixtures
# ============================================================================


def _user(ens_name: str, address: str, avatar: str | None = None) -> UserModel:
    return UserModel(ens_name=ens_name, address=address, avatar=avatar)


@pytest.fixture
async def sample_users(db_session: AsyncSession, fake_network) -> dict[str, UserModel]:
    """alice, bob and carol as stored users."""
    users = {
        "alice.eth": _user(
            "alice.eth",
            fake_network.addresses["alice.eth"],
            "https://example.com/alice.png",
        ),
        "bob.eth": _user("bob.eth", fake_network.addresses["bob.eth"]),
        "carol.eth": _user("carol.eth", fake_network.addresses["carol.eth"]),
    }
    db_session.add_all(users.values())
    await db_session.commit()
    return users


@pytest.fixture
async def sample_friendship(
    db_session: AsyncSession, sample_users: dict[str, UserModel]
) -> FriendshipModel:
    """An accepted friendship initiated by alice towards bob."""
    friendship = FriendshipModel(
        initiator_id=sample_users["alice.eth"].id,
        receiver_id=sample_users["bob.eth"].id,
        status=FriendshipStatus.ACCEPTED,
    )
    db_session.add(friendship)
    await db_session.commit()
    return friendship


# ============================================================================
# FastAPI Test Client Fixtures
# ============================================================================


@pytest.fixture
async def test_app(database: DatabaseManager, ens_resolver, memory_cache, mock_settings):
    """Create test FastAPI application with the fake RPC network and cache."""
    from fastapi import FastAPI

    from ensgraph.api.dependencies import get_cache_client, get_db_session, get_ens_resolver
    from ensgraph.api.errors import register_exception_handlers
    from ensgraph.api.routes import (
        friendships_router,
        graph_router,
        health_router,
        profiles_router,
    )

    # Create a minimal app for testing
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(profiles_router, prefix="/api/v1")
    app.include_router(friendships_router, prefix="/api/v1")
    app.include_router(graph_router, prefix="/api/v1")

    # Store in app state (for routes that access state directly)
    app.state.settings = mock_settings
    app.state.database = database
    app.state.db_session_factory = database.session_factory
    app.state.cache_client = memory_cache
    app.state.ens_resolver = ens_resolver

    # Override dependency injection functions
    async def override_db_session():
        async with database.session() as session:
            yield session

    async def override_ens_resolver():
        return ens_resolver

    async def override_cache_client():
        return memory_cache

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_ens_resolver] = override_ens_resolver
    app.dependency_overrides[get_cache_client] = override_cache_client

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
async def test_client(test_app) -> AsyncIterator[AsyncClient]:
    """Create async HTTP test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ============================================================================
# Marker Registration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as an integration test requiring a database",
    )
