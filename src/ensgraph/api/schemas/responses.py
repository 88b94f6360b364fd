"""Response schemas for API endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field

from ensgraph.api.schemas.base import APIBaseSchema
from ensgraph.core.types import FriendshipStatus


class ProfileResponse(APIBaseSchema):
    """Resolved ENS profile."""

    name: str
    address: str
    avatar: str | None = None
    text_records: dict[str, str] = Field(default_factory=dict)


class PrimaryNameResponse(APIBaseSchema):
    """Reverse resolution of an address."""

    address: str
    name: str | None = None


class FriendshipResponse(APIBaseSchema):
    """A created friendship."""

    id: UUID
    initiator: str
    receiver: str
    status: FriendshipStatus
    created_at: datetime


class GraphNodeResponse(APIBaseSchema):
    """Graph node (one per user)."""

    id: str
    label: str
    image: str | None = None


class GraphEdgeResponse(APIBaseSchema):
    """Graph edge (one per accepted friendship)."""

    id: str
    from_: str = Field(alias="from")
    to: str


class GraphResponse(APIBaseSchema):
    """Friendship network for visualization."""

    nodes: list[GraphNodeResponse] = Field(default_factory=list)
    edges: list[GraphEdgeResponse] = Field(default_factory=list)


class HealthResponse(APIBaseSchema):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    services: dict[str, Literal["up", "down", "unknown"]]
    rpc_endpoint: str | None = None
