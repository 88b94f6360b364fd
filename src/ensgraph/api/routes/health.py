"""Health check endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Request

from ensgraph import __version__
from ensgraph.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
    description="Check the health status of the API and its dependencies.",
)
async def health_check(request: Request) -> HealthResponse:
    """Check API health status."""
    services: dict[str, Literal["up", "down", "unknown"]] = {}
    overall_status: Literal["healthy", "degraded", "unhealthy"] = "healthy"

    # Check database
    try:
        database = getattr(request.app.state, "database", None)
        if database:
            await database.ping()
            services["database"] = "up"
        else:
            services["database"] = "unknown"
    except Exception:
        services["database"] = "down"
        overall_status = "unhealthy"

    # Check Redis
    try:
        cache_client = getattr(request.app.state, "cache_client", None)
        if cache_client:
            services["redis"] = "up" if await cache_client.ping() else "down"
        else:
            services["redis"] = "unknown"
    except Exception:
        services["redis"] = "down"
    if services["redis"] == "down" and overall_status == "healthy":
        overall_status = "degraded"

    # RPC endpoints are not probed here; report which one is preferred
    resolver = getattr(request.app.state, "ens_resolver", None)
    rpc_endpoint = resolver.state.endpoint if resolver else None
    services["rpc"] = "unknown"

    return HealthResponse(
        status=overall_status,
        version=__version__,
        services=services,
        rpc_endpoint=rpc_endpoint,
    )


@router.get(
    "/ready",
    operation_id="getReady",
    summary="Readiness check",
    description="Check if the API is ready to serve traffic.",
)
async def readiness_check(request: Request) -> dict[str, bool]:
    """Check if API is ready to serve traffic."""
    db_factory = getattr(request.app.state, "db_session_factory", None)
    resolver = getattr(request.app.state, "ens_resolver", None)

    ready = db_factory is not None and resolver is not None

    return {"ready": ready}
