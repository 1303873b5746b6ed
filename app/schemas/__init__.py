"""Request/response schemas."""

from app.schemas.api import (
    ErrorResponse,
    ImageListResponse,
    MessageResponse,
    StatusResponse,
    UploadResponse,
)

__all__ = [
    "ErrorResponse",
    "ImageListResponse",
    "MessageResponse",
    "StatusResponse",
    "UploadResponse",
]
