"""Storage package: object storage abstraction."""

from app.storage.contracts import ListPage, ObjectNotFoundError, ObjectStorage, Presigner, StorageError
from app.storage.factory import build_storage
from app.storage.minio_impl import MinioStorage

__all__ = [
    "ListPage",
    "MinioStorage",
    "ObjectNotFoundError",
    "ObjectStorage",
    "Presigner",
    "StorageError",
    "build_storage",
]
