"""API response models for image endpoints."""

from typing import Optional

from pydantic import BaseModel


class StatusResponse(BaseModel):
    """Root endpoint payload."""

    message: str
    status: str


class UploadResponse(BaseModel):
    """Result of a successful upload; ``url`` is omitted when presigning failed."""

    key: str
    url: Optional[str] = None
    message: str


class MessageResponse(BaseModel):
    message: str


class ImageListResponse(BaseModel):
    """Keys under the images prefix.

    ``next_cursor`` and ``has_more`` are only present for paginated listings.
    """

    images: list[str]
    count: int
    next_cursor: Optional[str] = None
    has_more: Optional[bool] = None


class ErrorResponse(BaseModel):
    error: str
