"""API route modules."""

from ensgraph.api.routes.friendships import router as friendships_router
from ensgraph.api.routes.graph import router as graph_router
from ensgraph.api.routes.health import router as health_router
from ensgraph.api.routes.profiles import router as profiles_router

__all__ = [
    "friendships_router",
    "graph_router",
    "health_router",
    "profiles_router",
]
