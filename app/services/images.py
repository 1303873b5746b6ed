"""Key naming, content typing and storage delegation for images.

Every object this service creates lives under ``images/`` and is named
``images/<unix-timestamp>_<filename>``. Two uploads of the same filename in
the same second map to the same key and the later one wins.
"""

from __future__ import annotations

import logging
import posixpath
import time
from dataclasses import dataclass

from app.core.errors import BackendError, NotFoundError, ValidationError
from app.storage.contracts import ListPage, ObjectNotFoundError, ObjectStorage, Presigner, StorageError

logger = logging.getLogger(__name__)

IMAGE_PREFIX = "images/"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
PRESIGN_TTL_MINUTES = 60

CONTENT_TYPES: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}
ALLOWED_EXTENSIONS = frozenset(CONTENT_TYPES)


def file_extension(name: str) -> str:
    """Lower-cased suffix from the last dot of the last path component.

    A bare dotfile counts as its own extension: ``.png`` gives ``.png``.
    """
    base = posixpath.basename(name)
    dot = base.rfind(".")
    return base[dot:].lower() if dot >= 0 else ""


def is_allowed_image(filename: str) -> bool:
    return file_extension(filename) in ALLOWED_EXTENSIONS


def content_type_for_key(key: str) -> str:
    """Infer the response content type from a key's extension."""
    return CONTENT_TYPES.get(file_extension(key), DEFAULT_CONTENT_TYPE)


def clean_filename(filename: str) -> str:
    """Drop any directory components a client put in the filename."""
    return posixpath.basename(filename.replace("\\", "/"))


def build_object_key(filename: str, timestamp: int | None = None) -> str:
    if timestamp is None:
        timestamp = int(time.time())
    return f"{IMAGE_PREFIX}{timestamp}_{clean_filename(filename)}"


@dataclass(frozen=True, slots=True)
class UploadResult:
    key: str
    url: str | None = None


class ImageService:
    """Maps image operations onto an ObjectStorage and translates its errors."""

    def __init__(self, storage: ObjectStorage):
        self._storage = storage

    def upload(self, filename: str, data: bytes, content_type: str | None = None) -> UploadResult:
        """Store an uploaded image and try to presign a download URL for it.

        Raises:
            ValidationError: Missing filename or extension not on the allow-list.
            BackendError: The store rejected the write.
        """
        filename = clean_filename(filename or "")
        if not filename:
            raise ValidationError("No image file provided")
        if not is_allowed_image(filename):
            raise ValidationError("Invalid file type. Only images are allowed")

        key = build_object_key(filename)
        try:
            self._storage.put(key, data, content_type or DEFAULT_CONTENT_TYPE)
        except StorageError as exc:
            raise BackendError(f"Failed to upload image: {exc}") from exc

        logger.info("Uploaded %s (%d bytes)", key, len(data))
        return UploadResult(key=key, url=self.try_presign(key))

    def try_presign(self, key: str, ttl_minutes: int = PRESIGN_TTL_MINUTES) -> str | None:
        """Presigned GET URL for key, or None if the store cannot produce one.

        A missing URL is a valid outcome and never fails the caller.
        """
        if not isinstance(self._storage, Presigner):
            return None
        try:
            return self._storage.presign(key, ttl_minutes)
        except StorageError as exc:
            logger.warning("Could not presign %s: %s", key, exc)
            return None

    def download(self, key: str) -> tuple[bytes, str]:
        """Return object bytes and the content type inferred from the key."""
        key = _require_key(key)
        try:
            data = self._storage.get(key)
        except ObjectNotFoundError as exc:
            raise NotFoundError("Image not found") from exc
        except StorageError as exc:
            raise BackendError(f"Failed to download image: {exc}") from exc
        return data, content_type_for_key(key)

    def delete(self, key: str) -> None:
        key = _require_key(key)
        try:
            self._storage.delete(key)
        except StorageError as exc:
            raise BackendError(f"Failed to delete image: {exc}") from exc
        logger.info("Deleted %s", key)

    def list_all(self) -> list[str]:
        try:
            return self._storage.list(IMAGE_PREFIX)
        except StorageError as exc:
            raise BackendError(f"Failed to list images: {exc}") from exc

    def list_page(self, limit: int, cursor: str = "") -> ListPage:
        try:
            return self._storage.list_page(IMAGE_PREFIX, limit=limit, cursor=cursor)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        except StorageError as exc:
            raise BackendError(f"Failed to list images: {exc}") from exc


def _require_key(key: str) -> str:
    if not key or not key.strip():
        raise ValidationError("Image key is required")
    return key


__all__ = [
    "ALLOWED_EXTENSIONS",
    "IMAGE_PREFIX",
    "ImageService",
    "UploadResult",
    "build_object_key",
    "content_type_for_key",
    "is_allowed_image",
]
