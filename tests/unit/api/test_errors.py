"""Tests for mapping domain exceptions to HTTP responses."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from ensgraph.api.errors import register_exception_handlers
from ensgraph.core.exceptions import (
    DuplicateError,
    EndpointUnavailableError,
    EnsGraphError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
async def error_client():
    app = FastAPI()
    register_exception_handlers(app)

    raised: dict[str, EnsGraphError] = {
        "validation": ValidationError("Both names must be valid ENS names ending with .eth"),
        "not-found": NotFoundError("Friendship not found"),
        "duplicate": DuplicateError("Friendship already exists", existing_id="abc"),
        "rpc": EndpointUnavailableError("All 3 attempts failed", endpoint="https://eth.drpc.org"),
    }

    @app.get("/raise/{kind}")
    async def raise_error(kind: str):
        raise raised[kind]

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestErrorHandler:
    """Tests for ensgraph_error_handler."""

    @pytest.mark.parametrize(
        "kind,status_code,code",
        [
            ("validation", 400, "validation_error"),
            ("not-found", 404, "not_found"),
            ("duplicate", 409, "conflict"),
            ("rpc", 500, "internal_error"),
        ],
    )
    async def test_status_mapping(
        self, error_client: AsyncClient, kind: str, status_code: int, code: str
    ):
        response = await error_client.get(f"/raise/{kind}")

        assert response.status_code == status_code
        assert response.json()["error"]["code"] == code

    async def test_message_in_body(self, error_client: AsyncClient):
        response = await error_client.get("/raise/not-found")

        assert response.json() == {
            "error": {"code": "not_found", "message": "Friendship not found"}
        }

    async def test_details_included(self, error_client: AsyncClient):
        response = await error_client.get("/raise/duplicate")

        assert response.json()["error"]["details"] == {"existing_id": "abc"}
