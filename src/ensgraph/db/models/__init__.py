"""Database models."""

from .friendship import FriendshipModel
from .user import UserModel

__all__ = [
    "FriendshipModel",
    "UserModel",
]
