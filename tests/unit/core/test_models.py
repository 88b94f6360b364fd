"""Tests for domain models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ensgraph.core.models import ENSProfile, GraphData, GraphEdge, GraphNode, ResolutionOutcome
from ensgraph.core.types import ResolutionStatus

# ============================================================================
# ResolutionOutcome Tests
# ============================================================================


class TestResolutionOutcome:
    """Tests for the tagged resolution result."""

    def test_from_value_resolved(self):
        outcome = ResolutionOutcome[str].from_value(
            "0xabc", endpoint="https://rpc.test", attempts=2
        )

        assert outcome.status == ResolutionStatus.RESOLVED
        assert outcome.resolved
        assert outcome.value == "0xabc"
        assert outcome.endpoint == "https://rpc.test"
        assert outcome.attempts == 2

    @pytest.mark.parametrize("value", [None, ""])
    def test_from_falsy_value_is_not_found(self, value):
        """Empty library results count as a missing record."""
        outcome = ResolutionOutcome[str].from_value(value, attempts=1)

        assert outcome.status == ResolutionStatus.NOT_FOUND
        assert not outcome.resolved
        assert outcome.value is None

    def test_degraded(self):
        outcome = ResolutionOutcome[str].degraded(TimeoutError("timed out"), attempts=3)

        assert outcome.status == ResolutionStatus.TRANSPORT_DEGRADED
        assert outcome.value is None
        assert outcome.error_message == "TimeoutError: timed out"
        assert outcome.attempts == 3

    def test_frozen(self):
        outcome = ResolutionOutcome[str].from_value("0xabc")

        with pytest.raises(ValidationError):
            outcome.value = "0xdef"


# ============================================================================
# Profile and Graph Model Tests
# ============================================================================


class TestENSProfile:
    """Tests for ENSProfile."""

    def test_defaults(self):
        profile = ENSProfile(name="carol.eth", address="0x" + "c3" * 20)

        assert profile.avatar is None
        assert profile.text_records == {}

    def test_json_round_trip(self, sample_profile: ENSProfile):
        """Profiles survive the JSON form used by the cache."""
        data = sample_profile.model_dump(mode="json")

        assert ENSProfile.model_validate(data) == sample_profile


class TestGraphModels:
    """Tests for graph nodes and edges."""

    def test_edge_serializes_from_alias(self):
        edge = GraphEdge(id="1", from_="alice.eth", to="bob.eth")

        assert edge.model_dump(by_alias=True) == {"id": "1", "from": "alice.eth", "to": "bob.eth"}

    def test_edge_accepts_alias(self):
        edge = GraphEdge.model_validate({"id": "1", "from": "alice.eth", "to": "bob.eth"})

        assert edge.from_ == "alice.eth"

    def test_graph_defaults_empty(self):
        graph = GraphData()

        assert graph.nodes == []
        assert graph.edges == []

    def test_node_image_optional(self):
        assert GraphNode(id="alice.eth", label="alice.eth").image is None
