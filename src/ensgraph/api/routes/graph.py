"""Graph data endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from ensgraph.api.dependencies import Graph
from ensgraph.api.schemas import GraphResponse

router = APIRouter(tags=["graph"])


@router.get(
    "/graph",
    response_model=GraphResponse,
    operation_id="getGraph",
    summary="Friendship graph",
    description="All users as nodes and accepted friendships as edges.",
)
async def get_graph(graph: Graph) -> GraphResponse:
    """Return the friendship network."""
    data = await graph.get_graph()
    return GraphResponse.model_validate(data.model_dump(by_alias=True))
