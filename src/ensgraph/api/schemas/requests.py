"""Request schemas for API endpoints."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ensgraph.api.schemas.base import APIBaseSchema

# Presence and format are validated by the services so that missing names
# produce the same 400 error body as malformed ones.
EnsNameField = Annotated[
    str | None,
    Field(
        default=None,
        max_length=255,
        description="ENS name, e.g. 'alice.eth'. Trimmed and lowercased server-side.",
    ),
]


class FriendshipRequest(APIBaseSchema):
    """Request to create or delete a friendship between two ENS names."""

    initiator: EnsNameField
    receiver: EnsNameField


class DeleteUserRequest(APIBaseSchema):
    """Request to delete a user and all of its friendships."""

    ens_name: EnsNameField
