"""MinIO-backed implementation of the storage interfaces."""

from __future__ import annotations

import io
import logging
from datetime import timedelta
from itertools import islice

from minio import Minio
from minio.error import S3Error

from app.storage.contracts import ListPage, ObjectNotFoundError, ObjectStorage, Presigner, StorageError

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchObject", "ResourceNotFound"})


def _wrap_error(op: str, bucket: str | None, key: str | None, exc: Exception) -> StorageError:
    if isinstance(exc, S3Error) and exc.code in NOT_FOUND_CODES:
        return ObjectNotFoundError(op=op, bucket=bucket, key=key, message=str(exc))
    return StorageError(op=op, bucket=bucket, key=key, message=str(exc))


class MinioStorage(ObjectStorage, Presigner):
    """Object storage abstraction backed by MinIO SDK.

    The bucket is fixed at construction; the instance holds no other state and
    is shared between concurrent requests.
    """

    def __init__(self, client: Minio, bucket: str):
        self._client = client
        self._bucket = bucket

    @property
    def bucket(self) -> str:
        return self._bucket

    # --------------------
    # ObjectStorage methods
    # --------------------
    def put(self, key: str, data: bytes, content_type: str) -> None:
        try:
            # MinIO requires a file-like object with read() method
            self._client.put_object(
                bucket_name=self._bucket,
                object_name=key,
                data=io.BytesIO(data),
                length=len(data),
                content_type=content_type,
            )
        except Exception as exc:
            raise _wrap_error("put", self._bucket, key, exc) from exc
        logger.debug("Stored %s (%d bytes, %s)", key, len(data), content_type)

    def get(self, key: str) -> bytes:
        try:
            obj = self._client.get_object(self._bucket, key)
            try:
                return obj.read()
            finally:
                obj.close()
                obj.release_conn()
        except Exception as exc:
            raise _wrap_error("get", self._bucket, key, exc) from exc

    def delete(self, key: str) -> None:
        # S3 semantics: removing a missing key succeeds
        try:
            self._client.remove_object(self._bucket, key)
        except Exception as exc:
            raise _wrap_error("delete", self._bucket, key, exc) from exc

    def list(self, prefix: str = "") -> list[str]:
        # The SDK iterator follows continuation tokens across backend pages
        try:
            return [
                obj.object_name
                for obj in self._client.list_objects(self._bucket, prefix=prefix or None, recursive=True)
            ]
        except Exception as exc:
            raise _wrap_error("list", self._bucket, prefix, exc) from exc

    def list_page(self, prefix: str = "", limit: int = 100, cursor: str = "") -> ListPage:
        if limit < 1:
            raise ValueError("limit must be a positive integer")

        try:
            objects = self._client.list_objects(
                self._bucket,
                prefix=prefix or None,
                recursive=True,
                start_after=cursor or None,
            )
            # One extra entry tells us whether another page exists
            names = [obj.object_name for obj in islice(objects, limit + 1)]
        except Exception as exc:
            raise _wrap_error("list", self._bucket, prefix, exc) from exc

        has_more = len(names) > limit
        keys = names[:limit]
        return ListPage(keys=keys, next_cursor=keys[-1] if has_more else "", has_more=has_more)

    def ping(self) -> None:
        try:
            exists = self._client.bucket_exists(self._bucket)
        except Exception as exc:
            raise _wrap_error("ping", self._bucket, None, exc) from exc
        if not exists:
            raise StorageError(op="ping", bucket=self._bucket, key=None, message="bucket does not exist")

    # -------------
    # Presigner API
    # -------------
    def presign(self, key: str, ttl_minutes: int = 60) -> str:
        try:
            return self._client.get_presigned_url(
                method="GET",
                bucket_name=self._bucket,
                object_name=key,
                expires=timedelta(minutes=ttl_minutes),
            )
        except Exception as exc:
            raise _wrap_error("presign", self._bucket, key, exc) from exc


__all__ = ["MinioStorage"]
