"""API schema definitions."""

from ensgraph.api.schemas.base import (
    APIBaseSchema,
    APIError,
    ErrorDetail,
    MessageResponse,
)
from ensgraph.api.schemas.requests import DeleteUserRequest, FriendshipRequest
from ensgraph.api.schemas.responses import (
    FriendshipResponse,
    GraphEdgeResponse,
    GraphNodeResponse,
    GraphResponse,
    HealthResponse,
    PrimaryNameResponse,
    ProfileResponse,
)

__all__ = [
    # Base
    "APIBaseSchema",
    "APIError",
    "ErrorDetail",
    "MessageResponse",
    # Requests
    "DeleteUserRequest",
    "FriendshipRequest",
    # Responses
    "FriendshipResponse",
    "GraphEdgeResponse",
    "GraphNodeResponse",
    "GraphResponse",
    "HealthResponse",
    "PrimaryNameResponse",
    "ProfileResponse",
]
