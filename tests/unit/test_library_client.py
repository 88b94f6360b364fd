"""Tests for the standalone EnsGraphClient."""

from __future__ import annotations

import pytest

from ensgraph.client import EnsGraphClient
from ensgraph.config import EnsGraphSettings


@pytest.fixture
def library_client(mock_settings: EnsGraphSettings, fake_network) -> EnsGraphClient:
    return EnsGraphClient(mock_settings, client_factory=fake_network.client_for)


class TestEnsGraphClient:
    """Tests for EnsGraphClient lifecycle and lookups."""

    async def test_requires_context(self, library_client: EnsGraphClient):
        with pytest.raises(RuntimeError, match="not initialized"):
            await library_client.resolve_name("alice.eth")

    async def test_lookups(self, library_client: EnsGraphClient, fake_network):
        async with library_client as client:
            assert await client.resolve_name("alice.eth") == fake_network.addresses["alice.eth"]
            assert await client.lookup_address(fake_network.addresses["bob.eth"]) == "bob.eth"
            assert await client.get_avatar("alice.eth") == "https://example.com/alice.png"
            assert await client.get_text_record("bob.eth", "description") == "Bob's profile"
            assert await client.get_all_text_records("carol.eth") == {}

    async def test_profile(self, library_client: EnsGraphClient):
        async with library_client as client:
            profile = await client.get_profile("alice.eth")

        assert profile is not None
        assert profile.text_records["com.github"] == "alice"

    async def test_closed_after_context(self, library_client: EnsGraphClient):
        async with library_client:
            pass

        with pytest.raises(RuntimeError, match="not initialized"):
            await library_client.get_profile("alice.eth")

    async def test_profile_requires_context(self, library_client: EnsGraphClient):
        with pytest.raises(RuntimeError, match="not initialized"):
            await library_client.get_profile("alice.eth")

    async def test_uses_primary_endpoint_first(
        self, library_client: EnsGraphClient, fake_network, mock_settings
    ):
        async with library_client as client:
            await client.resolve_name("alice.eth")

        assert fake_network.clients_built == [mock_settings.ethereum_rpc_url]
