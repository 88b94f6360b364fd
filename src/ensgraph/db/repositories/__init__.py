"""Repository implementations."""

from .base import BaseRepository
from .friendship import FriendshipRepository
from .user import UserRepository

__all__ = ["BaseRepository", "FriendshipRepository", "UserRepository"]
