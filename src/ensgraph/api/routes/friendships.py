"""Friendship and user management endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from ensgraph.api.dependencies import Friendships
from ensgraph.api.schemas import (
    APIError,
    DeleteUserRequest,
    FriendshipRequest,
    FriendshipResponse,
    MessageResponse,
)

router = APIRouter(tags=["friendships"])


@router.post(
    "/friendships",
    response_model=FriendshipResponse,
    operation_id="createFriendship",
    summary="Create a friendship",
    description=(
        "Create a friendship between two ENS names. Names are validated on-chain "
        "before a user is created for them."
    ),
    responses={400: {"model": APIError}, 409: {"model": APIError}},
)
async def create_friendship(
    request: FriendshipRequest,
    friendships: Friendships,
) -> FriendshipResponse:
    """Create an accepted friendship."""
    friendship = await friendships.create(request.initiator, request.receiver)

    return FriendshipResponse(
        id=friendship.id,
        initiator=friendship.initiator.ens_name,
        receiver=friendship.receiver.ens_name,
        status=friendship.status,
        created_at=friendship.created_at,
    )


@router.delete(
    "/friendships",
    response_model=MessageResponse,
    operation_id="deleteFriendship",
    summary="Delete a friendship",
    description="Remove the friendship between two ENS names, in either direction.",
    responses={400: {"model": APIError}, 404: {"model": APIError}},
)
async def delete_friendship(
    request: FriendshipRequest,
    friendships: Friendships,
) -> MessageResponse:
    """Delete a friendship."""
    await friendships.delete(request.initiator, request.receiver)
    return MessageResponse(message="Friendship deleted successfully")


@router.delete(
    "/users",
    response_model=MessageResponse,
    operation_id="deleteUser",
    summary="Delete a user",
    description="Remove a user together with all of its friendships.",
    responses={400: {"model": APIError}, 404: {"model": APIError}},
)
async def delete_user(
    request: DeleteUserRequest,
    friendships: Friendships,
) -> MessageResponse:
    """Delete a user and its friendships."""
    await friendships.delete_user(request.ens_name)
    return MessageResponse(message="User deleted successfully")
