"""HTTP-facing error taxonomy and FastAPI exception handlers."""

from __future__ import annotations

import logging
from typing import Mapping

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors rendered as ``{"error": message}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, headers: Mapping[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.headers = dict(headers) if headers else None


class ConfigurationError(ApiError):
    """Storage backend is not configured."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class ValidationError(ApiError):
    """Request input is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ApiError):
    """Requested object does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class BackendError(ApiError):
    """Object store call failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class AuthenticationError(ApiError):
    """Missing or wrong Basic Auth credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, headers={"WWW-Authenticate": 'Basic realm="Restricted"'})


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%d): %s", request.method, request.url.path, exc.status_code, exc.message)

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report framework validation failures as 400 in the same error shape."""
    parts = []
    for err in exc.errors():
        field = ".".join(str(x) for x in err.get("loc", ()) if x not in ("body", "query", "path"))
        parts.append(f"{field}: {err.get('msg', 'invalid value')}" if field else err.get("msg", "invalid value"))

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "; ".join(parts) or "Invalid request"},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework errors (unknown route, bad method, unparsable body) as ``{"error": detail}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


__all__ = [
    "ApiError",
    "AuthenticationError",
    "BackendError",
    "ConfigurationError",
    "NotFoundError",
    "ValidationError",
    "register_exception_handlers",
]
