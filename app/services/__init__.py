"""Business logic services."""

from app.services.images import (
    ALLOWED_EXTENSIONS,
    IMAGE_PREFIX,
    ImageService,
    UploadResult,
    build_object_key,
    content_type_for_key,
    is_allowed_image,
)

__all__ = [
    "ALLOWED_EXTENSIONS",
    "IMAGE_PREFIX",
    "ImageService",
    "UploadResult",
    "build_object_key",
    "content_type_for_key",
    "is_allowed_image",
]
