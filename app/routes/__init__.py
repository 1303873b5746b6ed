"""API routes package."""

from app.routes.health import router as health_router
from app.routes.images import router as images_router

__all__ = ["health_router", "images_router"]
