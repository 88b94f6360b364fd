"""Core types, models, and utilities."""

from .exceptions import (
    DuplicateError,
    EndpointUnavailableError,
    EnsGraphError,
    NotFoundError,
    ResolutionError,
    ValidationError,
)
from .models import ENSProfile, GraphData, GraphEdge, GraphNode, ResolutionOutcome
from .normalization import ENS_SUFFIX, is_address, is_ens_name, normalize_ens_name
from .types import (
    COMMON_TEXT_RECORD_KEYS,
    FriendshipStatus,
    ResolutionStatus,
    TextRecordKey,
)

__all__ = [
    # Types
    "COMMON_TEXT_RECORD_KEYS",
    "FriendshipStatus",
    "ResolutionStatus",
    "TextRecordKey",
    # Models
    "ENSProfile",
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "ResolutionOutcome",
    # Normalization
    "ENS_SUFFIX",
    "is_address",
    "is_ens_name",
    "normalize_ens_name",
    # Exceptions
    "DuplicateError",
    "EndpointUnavailableError",
    "EnsGraphError",
    "NotFoundError",
    "ResolutionError",
    "ValidationError",
]
