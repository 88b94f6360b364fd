"""Main library client for standalone usage."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ensgraph.config import EnsGraphSettings
from ensgraph.core.models import ENSProfile
from ensgraph.resolution.endpoints import ClientFactory
from ensgraph.resolution.resolver import ENSResolver
from ensgraph.services.profile import ProfileService

if TYPE_CHECKING:
    from ensgraph.cache.client import AsyncRedisClient

logger = logging.getLogger(__name__)


class EnsGraphClient:
    """
    ENS lookups without the web server or database.

    Usage:
        async with EnsGraphClient() as client:
            address = await client.resolve_name("vitalik.eth")
            profile = await client.get_profile("vitalik.eth")
            records = await client.get_all_text_records("vitalik.eth")

    Settings are loaded from environment variables or can be passed explicitly.
    """

    def __init__(
        self,
        settings: EnsGraphSettings | None = None,
        *,
        use_cache: bool = True,
        client_factory: ClientFactory | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Application settings. If not provided, loaded from environment.
            use_cache: Whether to use Redis caching if configured.
            client_factory: Builds the per-endpoint Ethereum client (web3 by default).
        """
        self._settings = settings or EnsGraphSettings()
        self._use_cache = use_cache
        self._client_factory = client_factory
        self._resolver: ENSResolver | None = None
        self._profiles: ProfileService | None = None
        self._cache: AsyncRedisClient | None = None

    async def __aenter__(self) -> EnsGraphClient:
        """Initialize resources on context entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up resources on context exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Initialize client resources."""
        self._resolver = ENSResolver.from_settings(self._settings, self._client_factory)

        if self._use_cache and self._settings.redis_url:
            try:
                from ensgraph.cache.client import AsyncRedisClient

                cache = AsyncRedisClient(
                    str(self._settings.redis_url),
                    default_ttl=self._settings.cache_ttl,
                )
                await cache.connect()
                self._cache = cache
                logger.info("Redis cache initialized")
            except Exception as e:
                logger.warning(f"Failed to initialize cache: {e}")
                self._cache = None

        self._profiles = ProfileService(
            self._resolver,
            cache=self._cache,
            cache_ttl=self._settings.cache_ttl,
        )

    async def close(self) -> None:
        """Close all resources."""
        self._resolver = None
        self._profiles = None

        if self._cache:
            await self._cache.close()
            self._cache = None

    @property
    def resolver(self) -> ENSResolver:
        """The underlying resolver; raises if the client is not initialized."""
        if self._resolver is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with EnsGraphClient() as client:'"
            )
        return self._resolver

    async def resolve_name(self, name: str) -> str | None:
        """Resolve an ENS name to an address."""
        return await self.resolver.resolve_name(name)

    async def lookup_address(self, address: str) -> str | None:
        """Reverse-resolve an address to its primary ENS name."""
        return await self.resolver.lookup_address(address)

    async def get_avatar(self, name: str) -> str | None:
        """Get the avatar URI of an ENS name."""
        return await self.resolver.get_avatar(name)

    async def get_text_record(self, name: str, key: str) -> str | None:
        """Get one text record of an ENS name."""
        return await self.resolver.get_text_record(name, key)

    async def get_all_text_records(self, name: str) -> dict[str, str]:
        """Get every well-known text record that is set on an ENS name."""
        return await self.resolver.get_all_text_records(name)

    async def get_profile(self, name: str) -> ENSProfile | None:
        """
        Look up a full profile, cached when Redis is configured.

        Raises:
            ValidationError: If the name is not a ``.eth`` name
        """
        if self._profiles is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with EnsGraphClient() as client:'"
            )
        return await self._profiles.get_profile(name)


# Convenience functions for one-off lookups
async def resolve_name(
    name: str,
    *,
    settings: EnsGraphSettings | None = None,
) -> str | None:
    """
    Resolve an ENS name (convenience function).

    For multiple lookups, use EnsGraphClient so endpoint rotation is shared.
    """
    async with EnsGraphClient(settings, use_cache=False) as client:
        return await client.resolve_name(name)


async def get_profile(
    name: str,
    *,
    settings: EnsGraphSettings | None = None,
) -> ENSProfile | None:
    """
    Look up an ENS profile (convenience function).

    For multiple lookups, use EnsGraphClient so endpoint rotation is shared.
    """
    async with EnsGraphClient(settings, use_cache=False) as client:
        return await client.get_profile(name)
