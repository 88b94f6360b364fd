"""FastAPI application and routes."""

from ensgraph.api.app import app, create_app

__all__ = [
    "app",
    "create_app",
]
