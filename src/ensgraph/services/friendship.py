"""Friendship service: validates ENS names and maintains the social graph."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError

from ensgraph.cache.decorators import cache_invalidate
from ensgraph.cache.keys import CacheKeys
from ensgraph.core.exceptions import DuplicateError, NotFoundError, ValidationError
from ensgraph.core.normalization import is_ens_name, normalize_ens_name
from ensgraph.core.types import FriendshipStatus
from ensgraph.db.models.friendship import FriendshipModel
from ensgraph.db.models.user import UserModel
from ensgraph.db.repositories.friendship import FriendshipRepository
from ensgraph.db.repositories.user import UserRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from ensgraph.cache.client import AsyncRedisClient
    from ensgraph.resolution.resolver import ENSResolver

logger = logging.getLogger(__name__)


def _invalidate_graph(*args, **kwargs) -> str:
    return CacheKeys.graph()


class FriendshipService:
    """
    Service for creating and removing friendships between ENS names.

    Users are created lazily the first time a name takes part in a
    friendship, and only after the name resolves on-chain.
    """

    def __init__(
        self,
        session: "AsyncSession",
        resolver: "ENSResolver",
        cache: "AsyncRedisClient | None" = None,
    ) -> None:
        self._session = session
        self._resolver = resolver
        self._cache = cache
        self._users = UserRepository(session)
        self._friendships = FriendshipRepository(session)

    @staticmethod
    def _normalize_pair(initiator: str | None, receiver: str | None) -> tuple[str, str]:
        initiator = normalize_ens_name(initiator)
        receiver = normalize_ens_name(receiver)
        if not initiator or not receiver:
            raise ValidationError("Both initiator and receiver ENS names are required")
        return initiator, receiver

    @cache_invalidate(_invalidate_graph)
    async def create(self, initiator: str | None, receiver: str | None) -> FriendshipModel:
        """
        Create an accepted friendship between two ENS names.

        Raises:
            ValidationError: Missing, non-``.eth``, identical or unresolvable names
            DuplicateError: The two names are already friends, in either direction
        """
        initiator, receiver = self._normalize_pair(initiator, receiver)

        if not is_ens_name(initiator) or not is_ens_name(receiver):
            raise ValidationError("Both names must be valid ENS names ending with .eth")

        if initiator == receiver:
            raise ValidationError("Cannot create friendship with self")

        initiator_user, receiver_user = await self._get_or_create_users(initiator, receiver)

        existing = await self._friendships.find_between(initiator_user.id, receiver_user.id)
        if existing:
            raise DuplicateError("Friendship already exists", existing_id=str(existing.id))

        friendship = FriendshipModel(
            initiator_id=initiator_user.id,
            receiver_id=receiver_user.id,
            status=FriendshipStatus.ACCEPTED,
        )
        try:
            await self._friendships.create(friendship)
        except IntegrityError as e:
            # A concurrent request stored the same pair, in either direction
            raise DuplicateError("Friendship already exists") from e

        logger.info(f"Friendship created: {initiator} -> {receiver}")
        return friendship

    async def _get_or_create_users(self, *ens_names: str) -> list[UserModel]:
        """
        Load users by name, creating the missing ones after on-chain validation.

        Database access stays sequential on the one session; only the RPC
        lookups for missing names run concurrently.
        """
        users: dict[str, UserModel | None] = {
            name: await self._users.get_by_ens_name(name) for name in ens_names
        }
        missing = [name for name, user in users.items() if user is None]

        if missing:
            lookups = await asyncio.gather(*(self._lookup_identity(name) for name in missing))
            for name, (address, avatar) in zip(missing, lookups):
                if not address:
                    raise ValidationError(
                        f'ENS name "{name}" does not resolve to an address',
                        {"name": name},
                    )
                # Another request may have stored the name during the lookup
                users[name], created = await self._users.get_or_create(name, address, avatar)
                if created:
                    logger.info(f"User created: {name} ({address})")

        return [users[name] for name in ens_names]

    async def _lookup_identity(self, ens_name: str) -> tuple[str | None, str | None]:
        address, avatar = await asyncio.gather(
            self._resolver.resolve_name(ens_name),
            self._resolver.get_avatar(ens_name),
        )
        return address, avatar

    @cache_invalidate(_invalidate_graph)
    async def delete(self, initiator: str | None, receiver: str | None) -> None:
        """
        Delete the friendship between two ENS names, whichever side initiated it.

        Raises:
            ValidationError: If either name is missing
            NotFoundError: If either user or the friendship does not exist
        """
        initiator, receiver = self._normalize_pair(initiator, receiver)

        initiator_user = await self._users.get_by_ens_name(initiator)
        receiver_user = await self._users.get_by_ens_name(receiver)
        if initiator_user is None or receiver_user is None:
            raise NotFoundError("Friendship not found")

        friendship = await self._friendships.find_between(initiator_user.id, receiver_user.id)
        if friendship is None:
            raise NotFoundError("Friendship not found")

        await self._friendships.delete(friendship)
        logger.info(f"Friendship deleted: {initiator} <-> {receiver}")

    @cache_invalidate(_invalidate_graph)
    async def delete_user(self, ens_name: str | None) -> None:
        """
        Delete a user and, by cascade, every friendship it takes part in.

        Raises:
            ValidationError: If the name is missing
            NotFoundError: If no such user exists
        """
        ens_name = normalize_ens_name(ens_name)
        if not ens_name:
            raise ValidationError("ENS name is required")

        user = await self._users.get_by_ens_name(ens_name)
        if user is None:
            raise NotFoundError("User not found")

        await self._users.delete(user)
        logger.info(f"User deleted: {ens_name}")
