"""Shared dependencies for FastAPI routes.

Settings and the storage adapter are created once per application (see
``app.main.create_app``) and read from ``request.app.state``.
"""

from __future__ import annotations

import logging
import secrets

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from app.core.config import Settings
from app.core.errors import AuthenticationError, ConfigurationError
from app.services.images import ImageService
from app.storage.contracts import ObjectStorage

logger = logging.getLogger(__name__)

_basic = HTTPBasic(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> ObjectStorage:
    """Return the configured storage adapter or fail with 503."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise ConfigurationError("Storage service not configured")
    return storage


def get_image_service(storage: ObjectStorage = Depends(get_storage)) -> ImageService:
    return ImageService(storage)


async def require_basic_auth(request: Request, settings: Settings = Depends(get_app_settings)) -> None:
    """Enforce Basic Auth when credentials are configured; no-op otherwise.

    The Authorization header is not looked at while auth is disabled.
    """
    if not settings.auth_enabled:
        return

    try:
        credentials: HTTPBasicCredentials | None = await _basic(request)
    except HTTPException as exc:
        # Malformed header: bad base64, no colon, or undecodable credentials
        raise AuthenticationError() from exc
    if credentials is None:
        raise AuthenticationError()

    user_ok = secrets.compare_digest(credentials.username.encode(), settings.AUTH_USERNAME.encode())
    password_ok = secrets.compare_digest(credentials.password.encode(), settings.AUTH_PASSWORD.encode())
    if not (user_ok and password_ok):
        logger.info("Rejected credentials for user %r", credentials.username)
        raise AuthenticationError()


__all__ = ["get_app_settings", "get_image_service", "get_storage", "require_basic_auth"]
