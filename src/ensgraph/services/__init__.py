"""Service layer for orchestrating business logic."""

from ensgraph.services.friendship import FriendshipService
from ensgraph.services.graph import GraphService
from ensgraph.services.profile import ProfileService

__all__ = [
    "FriendshipService",
    "GraphService",
    "ProfileService",
]
