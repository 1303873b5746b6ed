"""Storage interfaces and error types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


class StorageError(Exception):
    """Wraps underlying storage exceptions with operation context."""

    def __init__(self, op: str, bucket: str | None, key: str | None, message: str):
        self.op = op
        self.bucket = bucket
        self.key = key
        self.message = message
        super().__init__(self.__str__())

    def __str__(self) -> str:  # pragma: no cover - trivial string formatting
        bucket_repr = self.bucket or "<unknown>"
        key_repr = self.key or "<unknown>"
        return f"{self.op} failed for bucket={bucket_repr} key={key_repr}: {self.message}"


class ObjectNotFoundError(StorageError):
    """The requested key does not exist in the bucket."""


@dataclass(frozen=True, slots=True)
class ListPage:
    """One page of a prefix listing.

    ``next_cursor`` is opaque; pass it back unchanged to continue. An empty
    cursor together with ``has_more=False`` marks the end of the listing.
    """

    keys: list[str] = field(default_factory=list)
    next_cursor: str = ""
    has_more: bool = False


@runtime_checkable
class ObjectStorage(Protocol):
    """Contract for object storage implementations bound to a single bucket."""

    @property
    def bucket(self) -> str:
        ...

    def put(self, key: str, data: bytes, content_type: str) -> None:
        ...

    def get(self, key: str) -> bytes:
        ...

    def delete(self, key: str) -> None:
        ...

    def list(self, prefix: str = "") -> list[str]:
        ...

    def list_page(self, prefix: str = "", limit: int = 100, cursor: str = "") -> ListPage:
        ...

    def ping(self) -> None:
        ...


@runtime_checkable
class Presigner(Protocol):
    """Optional presigner interface for generating temporary URLs."""

    def presign(self, key: str, ttl_minutes: int = 60) -> str:
        ...


__all__ = ["ListPage", "ObjectNotFoundError", "ObjectStorage", "Presigner", "StorageError"]
