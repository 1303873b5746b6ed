"""Service status endpoints."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.core.config import Settings
from app.deps import get_app_settings
from app.schemas.api import StatusResponse
from app.storage.contracts import StorageError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/", response_model=StatusResponse)
def root(settings: Settings = Depends(get_app_settings)):
    """Liveness probe; does not touch storage."""
    return StatusResponse(message=settings.APP_NAME, status="running")


@router.get("/health/ready")
def readiness_check(request: Request):
    """Readiness probe - checks that the bucket is reachable."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        checks = {"storage": "not configured"}
    else:
        try:
            storage.ping()
            checks = {"storage": "ok"}
        except StorageError as e:
            logger.warning("Storage readiness check failed: %s", e)
            checks = {"storage": f"error: {e.message}"}

    all_ok = all(value == "ok" for value in checks.values())
    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={"status": "ok" if all_ok else "degraded", "checks": checks},
    )
