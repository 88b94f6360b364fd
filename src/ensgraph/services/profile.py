"""Profile lookups backed by the ENS resolver and an optional cache."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from ensgraph.cache.decorators import cached
from ensgraph.cache.keys import CacheKeys
from ensgraph.core.exceptions import ValidationError
from ensgraph.core.models import ENSProfile
from ensgraph.core.normalization import is_address, is_ens_name, normalize_ens_name

if TYPE_CHECKING:
    from ensgraph.cache.client import AsyncRedisClient
    from ensgraph.resolution.resolver import ENSResolver

logger = logging.getLogger(__name__)


class ProfileService:
    """
    Service for looking up ENS profiles.

    Only positive results are cached: a miss may be a degraded RPC pool
    rather than a missing name, and should be retried on the next request.
    """

    def __init__(
        self,
        resolver: "ENSResolver",
        cache: "AsyncRedisClient | None" = None,
        cache_ttl: int = 600,
    ) -> None:
        self._resolver = resolver
        self._cache = cache
        self._cache_ttl = cache_ttl

    async def get_profile(self, name: str) -> ENSProfile | None:
        """
        Look up the profile of an ENS name.

        Args:
            name: ENS name as typed by the user

        Returns:
            The profile, or None if the name does not resolve to an address

        Raises:
            ValidationError: If the name is empty or not a ``.eth`` name
        """
        ens_name = normalize_ens_name(name)
        if not ens_name:
            raise ValidationError("ENS name is required")
        if not is_ens_name(ens_name):
            raise ValidationError("ENS name must end with .eth", {"name": ens_name})

        start = time.monotonic()
        profile = await self._resolve_profile(ens_name)
        duration = time.monotonic() - start
        logger.info(f"Profile lookup completed in {duration:.2f}s: {ens_name}")

        return profile

    @cached(CacheKeys.profile, model=ENSProfile)
    async def _resolve_profile(self, ens_name: str) -> ENSProfile | None:
        return await self._resolver.get_profile(ens_name)

    async def get_primary_name(self, address: str) -> str | None:
        """
        Reverse-resolve an address to its primary ENS name.

        Raises:
            ValidationError: If the value is not a hex address
        """
        address = address.strip()
        if not is_address(address):
            raise ValidationError("Invalid Ethereum address", {"address": address})
        return await self._lookup_address(address)

    @cached(CacheKeys.primary_name)
    async def _lookup_address(self, address: str) -> str | None:
        return await self._resolver.lookup_address(address)
