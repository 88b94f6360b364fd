"""Domain models for ENS resolution results, profiles and the social graph."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .types import ResolutionStatus

ValueT = TypeVar("ValueT")


class ResolutionOutcome(BaseModel, Generic[ValueT]):
    """
    Tagged result of an ENS lookup.

    Distinguishes a resolved value from a genuine miss and from a degraded
    transport. ``value`` collapses the latter two into ``None`` for callers
    that only care whether something resolved.
    """

    model_config = ConfigDict(frozen=True)

    status: ResolutionStatus
    value: ValueT | None = None
    error_message: str | None = None
    endpoint: str | None = Field(default=None, description="Endpoint that answered last")
    attempts: int = Field(default=0, ge=0, description="RPC attempts made")

    @property
    def resolved(self) -> bool:
        return self.status == ResolutionStatus.RESOLVED

    @classmethod
    def from_value(
        cls,
        value: ValueT | None,
        *,
        endpoint: str | None = None,
        attempts: int = 0,
    ) -> ResolutionOutcome[ValueT]:
        """Build an outcome from a library result where falsy means "no record"."""
        if value:
            return cls(
                status=ResolutionStatus.RESOLVED,
                value=value,
                endpoint=endpoint,
                attempts=attempts,
            )
        return cls(status=ResolutionStatus.NOT_FOUND, endpoint=endpoint, attempts=attempts)

    @classmethod
    def degraded(cls, error: BaseException, *, attempts: int = 0) -> ResolutionOutcome[ValueT]:
        return cls(
            status=ResolutionStatus.TRANSPORT_DEGRADED,
            error_message=f"{type(error).__name__}: {error}",
            attempts=attempts,
        )


class ENSProfile(BaseModel):
    """Resolved identity data for an ENS name."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(..., description="Normalized ENS name")
    address: str = Field(..., description="Address the name resolves to")
    avatar: str | None = Field(default=None, description="Avatar URI, gateway-rewritten")
    text_records: dict[str, str] = Field(
        default_factory=dict, description="Non-empty well-known text records"
    )


class GraphNode(BaseModel):
    """A user in the friendship graph."""

    id: str
    label: str
    image: str | None = None


class GraphEdge(BaseModel):
    """A friendship between two ENS names."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    from_: str = Field(..., alias="from")
    to: str


class GraphData(BaseModel):
    """Node/edge payload for a network renderer."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
