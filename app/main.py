"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, get_settings
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.deps import require_basic_auth
from app.middleware import RequestLoggingMiddleware
from app.routes import health_router, images_router
from app.storage import ObjectStorage, build_storage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the storage adapter once; handlers only ever read it."""
    settings: Settings = app.state.settings
    setup_logging(settings.LOG_LEVEL)

    if app.state.storage is None:
        app.state.storage = build_storage(settings)

    if not settings.auth_enabled:
        logger.warning("Basic Auth credentials not set; configure AUTH_USERNAME and AUTH_PASSWORD")

    yield


def create_app(settings: Settings | None = None, storage: ObjectStorage | None = None) -> FastAPI:
    """Create the application.

    Args:
        settings: Explicit settings; loaded from the environment when omitted.
        storage: Pre-built storage adapter; built from settings at startup when omitted.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        lifespan=lifespan,
        dependencies=[Depends(require_basic_auth)],
    )
    app.state.settings = settings
    app.state.storage = storage

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(images_router)
    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    settings: Settings = app.state.settings
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
