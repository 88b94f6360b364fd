"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ensgraph import __version__
from ensgraph.api.errors import register_exception_handlers
from ensgraph.api.routes import friendships_router, graph_router, health_router, profiles_router
from ensgraph.config import EnsGraphSettings, get_settings
from ensgraph.log import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Handles startup and shutdown of resources.
    """
    settings: EnsGraphSettings = app.state.settings

    # Initialize database
    from ensgraph.db.session import DatabaseManager

    logger.info("Initializing database connection...")
    app.state.database = DatabaseManager(settings.database_url, echo=settings.debug)
    app.state.db_session_factory = app.state.database.session_factory
    if settings.debug:
        await app.state.database.create_all()

    # Initialize Redis cache (optional)
    app.state.cache_client = None
    if settings.redis_url:
        try:
            from ensgraph.cache.client import AsyncRedisClient

            logger.info("Initializing Redis cache...")
            cache_client = AsyncRedisClient(
                str(settings.redis_url), default_ttl=settings.cache_ttl
            )
            await cache_client.connect()
            app.state.cache_client = cache_client
            logger.info("Redis cache initialized")
        except Exception as e:
            logger.warning(f"Failed to initialize Redis: {e}")

    # One resolver per process so endpoint rotation is shared by all requests
    from ensgraph.resolution.resolver import ENSResolver

    app.state.ens_resolver = ENSResolver.from_settings(settings)
    logger.info(
        f"ENS resolver using {app.state.ens_resolver.state.size} RPC endpoint(s), "
        f"preferred {app.state.ens_resolver.state.endpoint}"
    )

    logger.info("Application startup complete")

    yield

    # Cleanup
    logger.info("Shutting down application...")

    if app.state.cache_client:
        await app.state.cache_client.close()

    await app.state.database.close()

    logger.info("Application shutdown complete")


def create_app(
    settings: EnsGraphSettings | None = None,
    *,
    title: str = "ENS Graph API",
    description: str = "ENS profile lookup and friendship graph API",
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings (loaded from the environment if omitted)
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=title,
        description=description,
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(profiles_router, prefix="/api/v1")
    app.include_router(friendships_router, prefix="/api/v1")
    app.include_router(graph_router, prefix="/api/v1")

    return app


# For uvicorn direct execution
app = create_app()
