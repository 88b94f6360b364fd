"""Mapping of domain exceptions to HTTP error responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ensgraph.api.schemas import APIError, ErrorDetail
from ensgraph.core.exceptions import (
    DuplicateError,
    EnsGraphError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first
_STATUS_CODES: list[tuple[type[EnsGraphError], int, str]] = [
    (ValidationError, 400, "validation_error"),
    (NotFoundError, 404, "not_found"),
    (DuplicateError, 409, "conflict"),
]


def _status_for(exc: EnsGraphError) -> tuple[int, str]:
    for exc_type, status_code, code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code, code
    return 500, "internal_error"


async def ensgraph_error_handler(request: Request, exc: EnsGraphError) -> JSONResponse:
    """Render an ``EnsGraphError`` as a standard ``APIError`` body."""
    status_code, code = _status_for(exc)
    if status_code >= 500:
        logger.error(f"Unhandled {type(exc).__name__} on {request.url.path}: {exc.message}")

    body = APIError(
        error=ErrorDetail(
            code=code,
            message=exc.message,
            details=exc.details or None,
        )
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain exception handler on an application."""
    app.add_exception_handler(EnsGraphError, ensgraph_error_handler)
