"""ENS Graph - ENS profile lookup and friendship graph service."""

__version__ = "0.1.0"

from ensgraph.client import EnsGraphClient, get_profile, resolve_name
from ensgraph.core.models import ENSProfile, GraphData, GraphEdge, GraphNode, ResolutionOutcome
from ensgraph.core.types import COMMON_TEXT_RECORD_KEYS, FriendshipStatus, ResolutionStatus
from ensgraph.resolution.endpoints import EndpointState, build_endpoint_pool
from ensgraph.resolution.resolver import ENSResolver

__all__ = [
    # Client
    "EnsGraphClient",
    "get_profile",
    "resolve_name",
    # Resolution
    "ENSResolver",
    "EndpointState",
    "build_endpoint_pool",
    # Types
    "COMMON_TEXT_RECORD_KEYS",
    "FriendshipStatus",
    "ResolutionStatus",
    # Models
    "ENSProfile",
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "ResolutionOutcome",
    # Version
    "__version__",
]
