"""Resilient ENS resolution with endpoint rotation and bounded retry."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Generic, TypeVar

from ensgraph.core.exceptions import EndpointUnavailableError
from ensgraph.core.models import ENSProfile, ResolutionOutcome
from ensgraph.core.types import COMMON_TEXT_RECORD_KEYS, ResolutionStatus
from ensgraph.resolution.client import EthereumClient, Web3EthereumClient
from ensgraph.resolution.endpoints import (
    ClientFactory,
    EndpointState,
    endpoint_pool_from_settings,
)

if TYPE_CHECKING:
    from ensgraph.config import EnsGraphSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3


@dataclass(frozen=True)
class _Execution(Generic[T]):
    """Value returned by a successful attempt and where it came from."""

    value: T
    endpoint: str
    attempts: int


class ENSResolver:
    """
    Resolves ENS names, reverse records, avatars and text records.

    Every RPC round trip goes through :meth:`execute`, which retries a failing
    operation on the next endpoint of the pool up to ``max_attempts`` times.
    The public lookups never raise: a name that does not resolve and a pool
    that is down both come back as ``None`` (or an empty mapping). The
    ``*_outcome`` variants keep the two cases apart.

    Usage:
        resolver = ENSResolver.from_settings(get_settings())
        address = await resolver.resolve_name("vitalik.eth")
        records = await resolver.get_all_text_records("vitalik.eth")
    """

    def __init__(
        self,
        state: EndpointState,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        text_record_keys: tuple[str, ...] = COMMON_TEXT_RECORD_KEYS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._state = state
        self._max_attempts = max_attempts
        self._text_record_keys = text_record_keys

    @classmethod
    def from_settings(
        cls,
        settings: EnsGraphSettings,
        client_factory: ClientFactory | None = None,
    ) -> ENSResolver:
        """Create a resolver over the configured endpoint pool."""
        if client_factory is None:
            client_factory = partial(Web3EthereumClient, timeout=settings.rpc_timeout)

        state = EndpointState(endpoint_pool_from_settings(settings), client_factory)
        return cls(state, max_attempts=settings.rpc_max_attempts)

    @property
    def state(self) -> EndpointState:
        return self._state

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    # ------------------------------------------------------------------
    # Retry primitive
    # ------------------------------------------------------------------

    async def execute(self, operation: Callable[[EthereumClient], Awaitable[T]]) -> T:
        """
        Run ``operation`` against the preferred endpoint, rotating on failure.

        Args:
            operation: Coroutine function taking the client to use

        Returns:
            The operation's result from the first attempt that succeeds

        Raises:
            EndpointUnavailableError: Once the attempt budget is spent, chained
                from the last underlying error
        """
        return (await self._run(operation)).value

    async def _run(self, operation: Callable[[EthereumClient], Awaitable[T]]) -> _Execution[T]:
        last_error: Exception | None = None
        last_endpoint = self._state.endpoint

        for attempt in range(1, self._max_attempts + 1):
            index, client = self._state.current()
            try:
                value = await operation(client)
            except Exception as e:
                last_error = e
                last_endpoint = client.url
                logger.debug(
                    f"RPC attempt {attempt}/{self._max_attempts} on {client.url} failed: {e!r}"
                )
                if self._state.rotate(index):
                    logger.warning(
                        f"RPC endpoint {client.url} failed, rotating to {self._state.endpoint}"
                    )
                continue

            return _Execution(value=value, endpoint=client.url, attempts=attempt)

        raise EndpointUnavailableError(
            f"All {self._max_attempts} attempts failed, last on {last_endpoint}: {last_error!r}",
            endpoint=last_endpoint,
        ) from last_error

    async def _outcome(
        self,
        operation: Callable[[EthereumClient], Awaitable[T | None]],
        description: str,
    ) -> ResolutionOutcome[T]:
        """Run an operation through the retry primitive and tag the result."""
        try:
            run = await self._run(operation)
        except Exception as e:
            logger.debug(f"{description} unavailable after {self._max_attempts} attempts: {e}")
            return ResolutionOutcome.degraded(e, attempts=self._max_attempts)

        return ResolutionOutcome.from_value(
            run.value,
            endpoint=run.endpoint,
            attempts=run.attempts,
        )

    # ------------------------------------------------------------------
    # Tagged lookups
    # ------------------------------------------------------------------

    async def resolve_name_outcome(self, name: str) -> ResolutionOutcome[str]:
        """Forward-resolve ``name`` to an address."""
        return await self._outcome(
            lambda client: client.resolve_name(name),
            f"Address of {name}",
        )

    async def lookup_address_outcome(self, address: str) -> ResolutionOutcome[str]:
        """Reverse-resolve ``address`` to its primary name."""
        return await self._outcome(
            lambda client: client.lookup_address(address),
            f"Primary name of {address}",
        )

    async def get_avatar_outcome(self, name: str) -> ResolutionOutcome[str]:
        """
        Fetch the avatar URI of ``name``.

        Only the resolver lookup is retried; the avatar query runs once on the
        handle it returned, and is skipped entirely when there is no resolver.
        """
        try:
            run = await self._run(lambda client: client.get_resolver(name))
        except Exception as e:
            logger.debug(f"Resolver of {name} unavailable: {e}")
            return ResolutionOutcome.degraded(e, attempts=self._max_attempts)

        if run.value is None:
            return ResolutionOutcome(
                status=ResolutionStatus.NOT_FOUND,
                endpoint=run.endpoint,
                attempts=run.attempts,
            )

        try:
            avatar = await run.value.get_avatar()
        except Exception as e:
            logger.debug(f"Avatar query for {name} failed: {e}")
            return ResolutionOutcome.degraded(e, attempts=run.attempts)

        return ResolutionOutcome.from_value(avatar, endpoint=run.endpoint, attempts=run.attempts)

    async def get_text_record_outcome(self, name: str, key: str) -> ResolutionOutcome[str]:
        """Fetch one text record; the resolver lookup and query retry together."""
        return await self._outcome(
            partial(self._fetch_text, name=name, key=key),
            f"Text record {key!r} of {name}",
        )

    @staticmethod
    async def _fetch_text(client: EthereumClient, *, name: str, key: str) -> str | None:
        resolver = await client.get_resolver(name)
        if resolver is None:
            return None
        return await resolver.get_text(key)

    # ------------------------------------------------------------------
    # Plain lookups (absence on any failure)
    # ------------------------------------------------------------------

    async def resolve_name(self, name: str) -> str | None:
        """Resolve an ENS name to an address, or ``None``."""
        return (await self.resolve_name_outcome(name)).value

    async def lookup_address(self, address: str) -> str | None:
        """Reverse-resolve an address to an ENS name, or ``None``."""
        return (await self.lookup_address_outcome(address)).value

    async def get_avatar(self, name: str) -> str | None:
        """Get the avatar URI of an ENS name, or ``None``."""
        return (await self.get_avatar_outcome(name)).value

    async def get_text_record(self, name: str, key: str) -> str | None:
        """Get one text record of an ENS name, or ``None``."""
        return (await self.get_text_record_outcome(name, key)).value

    async def get_all_text_records(self, name: str) -> dict[str, str]:
        """
        Fetch every well-known text record of ``name`` concurrently.

        Returns:
            Mapping of key to value for the records that are set; empty when
            the name has none or cannot be resolved
        """
        keys = self._text_record_keys
        results = await asyncio.gather(
            *(self.get_text_record(name, key) for key in keys),
            return_exceptions=True,
        )

        return {
            key: value
            for key, value in zip(keys, results)
            if isinstance(value, str) and value
        }

    async def get_profile(self, name: str) -> ENSProfile | None:
        """
        Resolve address, text records and avatar of ``name`` concurrently.

        Returns:
            The profile, or ``None`` if the name does not resolve to an address
        """
        address, text_records, avatar = await asyncio.gather(
            self.resolve_name(name),
            self.get_all_text_records(name),
            self.get_avatar(name),
        )

        if not address:
            return None

        return ENSProfile(
            name=name,
            address=address,
            avatar=avatar,
            text_records=text_records,
        )
