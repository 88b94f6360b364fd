"""Shared test fixtures for all tests."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field

import pytest

from ensgraph.config import EnsGraphSettings
from ensgraph.core.models import ENSProfile
from ensgraph.resolution.endpoints import EndpointState
from ensgraph.resolution.resolver import ENSResolver

# ============================================================================
# Test Data Constants
# ============================================================================


ALICE = "alice.eth"
BOB = "bob.eth"
CAROL = "carol.eth"
UNREGISTERED = "nobody-owns-this.eth"

ALICE_ADDRESS = "0x" + "a1" * 20
BOB_ADDRESS = "0x" + "b2" * 20
CAROL_ADDRESS = "0x" + "c3" * 20

PRIMARY_URL = "https://rpc.primary.test"
FALLBACK_URLS = (
    "https://rpc.fallback-1.test",
    "https://rpc.fallback-2.test",
    "https://rpc.fallback-3.test",
)


# ============================================================================
# Fake Ethereum Network
# ============================================================================


class RPCUnavailable(ConnectionError):
    """Raised by fake clients bound to an endpoint that is down."""


@dataclass
class FakeNetwork:
    """
    In-memory ENS registry shared by every fake client.

    Endpoints listed in ``down`` raise on every call. Every call is recorded
    in ``calls`` as ``(url, method, argument)``.
    """

    addresses: dict[str, str] = field(default_factory=dict)
    reverse: dict[str, str] = field(default_factory=dict)
    text_records: dict[str, dict[str, str]] = field(default_factory=dict)
    down: set[str] = field(default_factory=set)
    failing_text_keys: set[str] = field(default_factory=set)
    calls: list[tuple[str, str, str]] = field(default_factory=list)
    clients_built: list[str] = field(default_factory=list)

    def client_for(self, url: str) -> FakeEthereumClient:
        self.clients_built.append(url)
        return FakeEthereumClient(url, self)

    def calls_to(self, method: str) -> list[tuple[str, str, str]]:
        return [call for call in self.calls if call[1] == method]

    def has_resolver(self, name: str) -> bool:
        return name in self.addresses or name in self.text_records


class FakeResolverHandle:
    def __init__(self, network: FakeNetwork, url: str, name: str) -> None:
        self._network = network
        self._url = url
        self._name = name

    async def get_text(self, key: str) -> str | None:
        self._network.calls.append((self._url, "get_text", key))
        if self._url in self._network.down or key in self._network.failing_text_keys:
            raise RPCUnavailable(self._url)
        return self._network.text_records.get(self._name, {}).get(key) or None

    async def get_avatar(self) -> str | None:
        self._network.calls.append((self._url, "get_avatar", self._name))
        if self._url in self._network.down:
            raise RPCUnavailable(self._url)
        return self._network.text_records.get(self._name, {}).get("avatar") or None


class FakeEthereumClient:
    def __init__(self, url: str, network: FakeNetwork) -> None:
        self.url = url
        self._network = network

    async def _call(self, method: str, argument: str) -> None:
        # Yield so concurrent lookups interleave as they would on a socket
        await asyncio.sleep(0)
        self._network.calls.append((self.url, method, argument))
        if self.url in self._network.down:
            raise RPCUnavailable(self.url)

    async def resolve_name(self, name: str) -> str | None:
        await self._call("resolve_name", name)
        return self._network.addresses.get(name)

    async def lookup_address(self, address: str) -> str | None:
        await self._call("lookup_address", address)
        return self._network.reverse.get(address.lower())

    async def get_resolver(self, name: str) -> FakeResolverHandle | None:
        await self._call("get_resolver", name)
        if not self._network.has_resolver(name):
            return None
        return FakeResolverHandle(self._network, self.url, name)


# ============================================================================
# Cache Fake
# ============================================================================


class InMemoryCache:
    """Stand-in for AsyncRedisClient that keeps its JSON round trip."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key: str):
        value = self.store.get(key)
        return None if value is None else json.loads(value)

    async def set(self, key: str, value, ttl: int | None = None) -> None:
        self.store[key] = json.dumps(value, default=str)
        self.ttls[key] = ttl or 600

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            self.ttls.pop(key, None)
            removed += self.store.pop(key, None) is not None
        return removed

    async def ping(self) -> bool:
        return True


@pytest.fixture
def memory_cache() -> InMemoryCache:
    return InMemoryCache()


# ============================================================================
# Resolution Fixtures
# ============================================================================


@pytest.fixture
def endpoint_pool() -> tuple[str, ...]:
    """Primary endpoint followed by three fallbacks."""
    return (PRIMARY_URL, *FALLBACK_URLS)


@pytest.fixture
def fake_network() -> FakeNetwork:
    """Registry with alice and bob registered; carol has only an address."""
    return FakeNetwork(
        addresses={
            ALICE: ALICE_ADDRESS,
            BOB: BOB_ADDRESS,
            CAROL: CAROL_ADDRESS,
        },
        reverse={ALICE_ADDRESS: ALICE, BOB_ADDRESS: BOB},
        text_records={
            ALICE: {
                "avatar": "https://example.com/alice.png",
                "com.github": "alice",
                "com.twitter": "alice_eth",
            },
            BOB: {"description": "Bob's profile"},
        },
    )


@pytest.fixture
def endpoint_state(fake_network: FakeNetwork, endpoint_pool: tuple[str, ...]) -> EndpointState:
    return EndpointState(endpoint_pool, fake_network.client_for)


@pytest.fixture
def ens_resolver(endpoint_state: EndpointState) -> ENSResolver:
    """Resolver over the fake network with the default three attempts."""
    return ENSResolver(endpoint_state)


@pytest.fixture
def sample_profile() -> ENSProfile:
    """Create a fully populated sample profile."""
    return ENSProfile(
        name=ALICE,
        address=ALICE_ADDRESS,
        avatar="https://example.com/alice.png",
        text_records={"com.github": "alice", "com.twitter": "alice_eth"},
    )


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def mock_settings() -> EnsGraphSettings:
    """Create mock settings for testing."""
    return EnsGraphSettings(
        ethereum_rpc_url=PRIMARY_URL,
        rpc_fallback_urls=list(FALLBACK_URLS),
        database_url="sqlite+aiosqlite:///:memory:",
        redis_url=None,
        debug=True,
        log_level="DEBUG",
    )


@pytest.fixture
def mock_settings_minimal() -> EnsGraphSettings:
    """Create minimal settings with only the public fallback endpoints."""
    return EnsGraphSettings(
        ethereum_rpc_url=None,
        redis_url=None,
    )
