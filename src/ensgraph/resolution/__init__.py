"""ENS resolution layer with RPC endpoint failover."""

from ensgraph.resolution.client import (
    EthereumClient,
    ResolverHandle,
    Web3EthereumClient,
    Web3ResolverHandle,
    normalize_avatar_uri,
)
from ensgraph.resolution.endpoints import (
    ClientFactory,
    EndpointState,
    build_endpoint_pool,
    endpoint_pool_from_settings,
)
from ensgraph.resolution.resolver import DEFAULT_MAX_ATTEMPTS, ENSResolver

__all__ = [
    # Client
    "EthereumClient",
    "ResolverHandle",
    "Web3EthereumClient",
    "Web3ResolverHandle",
    "normalize_avatar_uri",
    # Endpoints
    "ClientFactory",
    "EndpointState",
    "build_endpoint_pool",
    "endpoint_pool_from_settings",
    # Resolver
    "DEFAULT_MAX_ATTEMPTS",
    "ENSResolver",
]
