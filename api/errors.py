"""
API Error Handling

Standardized error handling for the API. Every failure path produces
``{"success": false, "error": "<message>"}`` and never echoes request
values back to the client.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models.responses import ErrorResponse
from core.crypto.errors import DecodeError, EntropyError, InvalidKeyError, SigilException


logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields"


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(success=False, error=self.message)


class InvalidRequestError(APIError):
    """Invalid or missing request fields."""

    def __init__(self, message: str = MISSING_FIELDS_MESSAGE):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
        )


class KeyFormatError(APIError):
    """Malformed or inconsistent key, signature or address."""

    def __init__(self, message: str):
        super().__init__(
            code="INVALID_KEY_FORMAT",
            message=message,
            status_code=400,
        )


class RateLimitedError(APIError):
    """Client exceeded its request rate."""

    def __init__(self, message: str = "Too many requests"):
        super().__init__(
            code="RATE_LIMITED",
            message=message,
            status_code=429,
        )


class InternalError(APIError):
    """Internal server error."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
        )


def from_crypto_error(exc: SigilException) -> APIError:
    """
    Map a core crypto exception onto an API error.

    DecodeError and InvalidKeyError are caller input errors (400).
    EntropyError is a server-side failure (500).
    """
    if isinstance(exc, EntropyError):
        return InternalError("Failed to generate keypair")
    if isinstance(exc, (DecodeError, InvalidKeyError)):
        return KeyFormatError(exc.message)
    return InternalError()


def error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(success=False, error=message).model_dump(),
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle malformed request bodies.

    Pydantic errors carry the offending input values, which may include a
    secret key, so only a fixed message is returned.
    """
    errors = exc.errors()
    if any(err.get("type") == "missing" for err in errors):
        message = MISSING_FIELDS_MESSAGE
    else:
        locations = sorted({
            str(err["loc"][-1])
            for err in errors
            if err.get("loc") and isinstance(err["loc"][-1], str) and err["loc"][-1] != "body"
        })
        message = "Invalid request body"
        if locations:
            message += f": {', '.join(locations)}"
    return error_json(400, message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle routing errors (404, 405) in the standard envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(success=False, error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}")
    return error_json(500, "An unexpected error occurred")
