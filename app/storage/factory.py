"""Factory for building storage instances from configuration."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from minio import Minio

from app.core.config import Settings
from app.storage.minio_impl import MinioStorage

logger = logging.getLogger(__name__)


def _normalize_endpoint(endpoint: str) -> tuple[str, bool]:
    """Extract host:port from endpoint URL and determine if secure (https).

    A bare ``host:port`` without scheme is treated as https.

    Returns:
        Tuple of (host:port, secure_flag)
    """
    if "://" not in endpoint:
        return endpoint.rstrip("/"), True
    parsed = urlparse(endpoint)
    secure = parsed.scheme == "https"
    host = parsed.netloc or parsed.path.rstrip("/")
    return host, secure


def build_storage(settings: Settings) -> MinioStorage | None:
    """Build MinioStorage from settings, or None when storage is not configured.

    Relevant settings:
        R2_ACCOUNT_ID: Account id; endpoint becomes https://<id>.r2.cloudflarestorage.com
        R2_ENDPOINT: Explicit endpoint URL, overrides the derived one
        R2_ACCESS_KEY_ID / R2_SECRET_ACCESS_KEY: Credentials
        R2_BUCKET_NAME: Bucket holding the images
        R2_REGION: Signing region (R2 uses "auto")

    MinIO addresses non-AWS endpoints path-style, which R2 requires.
    """
    if not settings.storage_configured:
        logger.warning("R2 credentials not configured; storage endpoints will return 503")
        return None

    host, secure = _normalize_endpoint(settings.storage_endpoint)
    client = Minio(
        host,
        access_key=settings.R2_ACCESS_KEY_ID,
        secret_key=settings.R2_SECRET_ACCESS_KEY,
        secure=secure,
        region=settings.R2_REGION,
    )
    logger.info("Object storage at %s (bucket=%s)", host, settings.R2_BUCKET_NAME)
    return MinioStorage(client, settings.R2_BUCKET_NAME)


__all__ = ["build_storage"]
