"""Custom exception hierarchy for ensgraph."""

from typing import Any


class EnsGraphError(Exception):
    """Base exception for all ensgraph errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(EnsGraphError):
    """Input validation failed."""

    pass


class ResolutionError(EnsGraphError):
    """Failed to resolve an ENS name or address."""

    pass


class EndpointUnavailableError(ResolutionError):
    """An Ethereum RPC endpoint could not serve a request."""

    def __init__(
        self,
        message: str,
        endpoint: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.endpoint = endpoint


class NotFoundError(EnsGraphError):
    """Resource not found."""

    pass


class DuplicateError(EnsGraphError):
    """Duplicate resource detected."""

    def __init__(
        self,
        message: str,
        existing_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if existing_id:
            details.setdefault("existing_id", existing_id)
        super().__init__(message, details)
        self.existing_id = existing_id

