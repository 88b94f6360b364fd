"""ENS profile and reverse-resolution endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from ensgraph.api.dependencies import Profiles
from ensgraph.api.schemas import PrimaryNameResponse, ProfileResponse
from ensgraph.core.exceptions import NotFoundError

router = APIRouter(tags=["profiles"])


@router.get(
    "/profiles/{name}",
    response_model=ProfileResponse,
    operation_id="getProfile",
    summary="Look up an ENS profile",
    description="Resolve the address, avatar and well-known text records of an ENS name.",
)
async def get_profile(name: str, profiles: Profiles) -> ProfileResponse:
    """Resolve an ENS profile."""
    profile = await profiles.get_profile(name)

    if profile is None:
        raise NotFoundError(f"{name} does not resolve to an address", {"name": name})

    return ProfileResponse.model_validate(profile)


@router.get(
    "/resolve/address/{address}",
    response_model=PrimaryNameResponse,
    operation_id="lookupAddress",
    summary="Reverse-resolve an address",
    description="Look up the primary ENS name of an Ethereum address.",
)
async def lookup_address(address: str, profiles: Profiles) -> PrimaryNameResponse:
    """Reverse-resolve an address to its primary ENS name."""
    name = await profiles.get_primary_name(address)
    return PrimaryNameResponse(address=address, name=name)
