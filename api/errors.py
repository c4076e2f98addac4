"""
API Error Handling

Standardized error handling for the API. Domain exceptions are mapped to
HTTP status codes by error code and rendered in the ErrorResponse envelope.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorDetail, ErrorResponse
from core.schemas.errors import BeaconRootException, ErrorCodes


logger = logging.getLogger(__name__)


# Domain error code -> HTTP status; anything else is a 400
STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.FIELD_NOT_FOUND: 404,
    ErrorCodes.COMMITMENT_NOT_FOUND: 404,
    ErrorCodes.TIMESTAMP_NOT_INCREASING: 409,
    ErrorCodes.SOURCE_UNAVAILABLE: 502,
}


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


class CommitmentNotFoundError(APIError):
    """No root committed for a timestamp."""

    def __init__(self, timestamp: int):
        super().__init__(
            code=ErrorCodes.COMMITMENT_NOT_FOUND,
            message=f"No root committed for timestamp {timestamp}",
            status_code=404,
            details={"timestamp": timestamp},
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def domain_error_handler(request: Request, exc: BeaconRootException) -> JSONResponse:
    """Handle domain exceptions raised by the core and orchestrator."""
    status_code = STATUS_BY_CODE.get(exc.code, 400)
    logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.code}")
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(**exc.to_error_model().model_dump()),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
