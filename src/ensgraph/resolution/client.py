"""Ethereum client adapter over web3.py's async ENS module."""

from __future__ import annotations

from typing import Any, Protocol

import aiohttp
from ens import AsyncENS
from web3 import AsyncHTTPProvider, AsyncWeb3

IPFS_GATEWAY = "https://ipfs.io"
ARWEAVE_GATEWAY = "https://arweave.net"


class ResolverHandle(Protocol):
    """Resolver record of one ENS name."""

    async def get_avatar(self) -> str | None: ...

    async def get_text(self, key: str) -> str | None: ...


class EthereumClient(Protocol):
    """JSON-RPC capabilities the resolution layer relies on."""

    url: str

    async def resolve_name(self, name: str) -> str | None: ...

    async def lookup_address(self, address: str) -> str | None: ...

    async def get_resolver(self, name: str) -> ResolverHandle | None: ...


def normalize_avatar_uri(uri: str | None) -> str | None:
    """
    Rewrite decentralized-storage avatar URIs to HTTP gateway URLs.

    ``https://``, ``data:`` and NFT (``eip155:``) references are returned
    unchanged. Empty values become ``None``.
    """
    if not uri:
        return None

    uri = uri.strip()
    lowered = uri.lower()

    if lowered.startswith("ipfs://"):
        path = uri[len("ipfs://"):]
        if path.lower().startswith("ipfs/"):
            path = path[len("ipfs/"):]
        return f"{IPFS_GATEWAY}/ipfs/{path}"

    if lowered.startswith("ipns://"):
        return f"{IPFS_GATEWAY}/ipns/{uri[len('ipns://'):]}"

    if lowered.startswith("ar://"):
        return f"{ARWEAVE_GATEWAY}/{uri[len('ar://'):]}"

    return uri or None


class Web3ResolverHandle:
    """Resolver handle backed by :class:`ens.AsyncENS`.

    Text lookups go through ``AsyncENS.get_text`` so wildcard (ENSIP-10)
    resolvers are handled by the library.
    """

    def __init__(self, ens: AsyncENS, name: str, contract: Any) -> None:
        self._ens = ens
        self._name = name
        self.contract = contract

    @property
    def address(self) -> str:
        return self.contract.address

    async def get_text(self, key: str) -> str | None:
        value = await self._ens.get_text(self._name, key)
        return value or None

    async def get_avatar(self) -> str | None:
        return normalize_avatar_uri(await self.get_text("avatar"))


class Web3EthereumClient:
    """
    :class:`EthereumClient` bound to a single RPC endpoint.

    Construction is cheap; no connection is opened until the first call.
    """

    def __init__(self, url: str, *, timeout: float | None = None) -> None:
        self.url = url

        request_kwargs: dict[str, Any] = {}
        if timeout is not None:
            request_kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)

        self._w3 = AsyncWeb3(AsyncHTTPProvider(url, request_kwargs=request_kwargs))
        self._ens = AsyncENS.from_web3(self._w3)

    async def resolve_name(self, name: str) -> str | None:
        address = await self._ens.address(name)
        return str(address) if address else None

    async def lookup_address(self, address: str) -> str | None:
        return await self._ens.name(address)

    async def get_resolver(self, name: str) -> Web3ResolverHandle | None:
        contract = await self._ens.resolver(name)
        if contract is None:
            return None
        return Web3ResolverHandle(self._ens, name, contract)

    def __repr__(self) -> str:
        return f"<Web3EthereumClient(url='{self.url}')>"
