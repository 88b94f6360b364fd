"""RPC endpoint pool and the rotating cursor/client state."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from ensgraph.config import DEFAULT_RPC_FALLBACK_URLS

if TYPE_CHECKING:
    from ensgraph.config import EnsGraphSettings
    from ensgraph.resolution.client import EthereumClient

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], "EthereumClient"]


def build_endpoint_pool(
    primary: str | None = None,
    fallbacks: Sequence[str] = DEFAULT_RPC_FALLBACK_URLS,
) -> tuple[str, ...]:
    """
    Assemble the ordered endpoint pool.

    The primary endpoint, when configured, always comes first, followed by
    the fallbacks verbatim in priority order.

    Raises:
        ValueError: If the resulting pool would be empty
    """
    pool = tuple(url for url in (primary, *fallbacks) if url)
    if not pool:
        raise ValueError("At least one RPC endpoint must be configured")
    return pool


def endpoint_pool_from_settings(settings: EnsGraphSettings) -> tuple[str, ...]:
    """Build the endpoint pool from application settings."""
    return build_endpoint_pool(settings.ethereum_rpc_url, settings.rpc_fallback_urls)


class EndpointState:
    """
    Process-wide preferred endpoint and its lazily built client.

    The pool is immutable. The cursor is only a hint for where the next
    attempt should go: callers keep their own attempt counters and report
    failures through :meth:`rotate`, which advances the cursor only if it
    still points at the endpoint that failed. Concurrent failures against
    the same endpoint therefore move the cursor once, not once per caller.
    """

    def __init__(
        self,
        pool: Sequence[str],
        client_factory: ClientFactory,
        *,
        start: int = 0,
    ) -> None:
        if not pool:
            raise ValueError("Endpoint pool must not be empty")
        self._pool = tuple(pool)
        self._client_factory = client_factory
        self._cursor = start % len(self._pool)
        self._client: EthereumClient | None = None
        self._rotations = 0

    @property
    def pool(self) -> tuple[str, ...]:
        return self._pool

    @property
    def size(self) -> int:
        return len(self._pool)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def endpoint(self) -> str:
        """URL at the current cursor."""
        return self._pool[self._cursor]

    @property
    def rotations(self) -> int:
        """Number of times the cursor has advanced."""
        return self._rotations

    def current(self) -> tuple[int, EthereumClient]:
        """Return the cursor and its client, building the client on first use."""
        if self._client is None:
            logger.debug(f"Connecting to RPC endpoint {self.endpoint}")
            self._client = self._client_factory(self.endpoint)
        return self._cursor, self._client

    def rotate(self, failed_index: int) -> bool:
        """
        Move past a failed endpoint.

        The old client is dropped rather than closed so in-flight calls that
        still hold it can finish.

        Returns:
            True if the cursor advanced, False if another call already moved it
        """
        if failed_index != self._cursor:
            return False

        self._cursor = (self._cursor + 1) % len(self._pool)
        self._client = None
        self._rotations += 1
        return True
