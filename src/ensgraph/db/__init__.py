"""Database layer."""

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, create_engine, create_session_factory
from .models import FriendshipModel, UserModel
from .repositories import BaseRepository, FriendshipRepository, UserRepository
from .session import DatabaseManager

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "create_engine",
    "create_session_factory",
    # Models
    "FriendshipModel",
    "UserModel",
    # Repositories
    "BaseRepository",
    "FriendshipRepository",
    "UserRepository",
    # Session
    "DatabaseManager",
]
