"""Pytest configuration and fixtures."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.storage.contracts import ListPage, ObjectNotFoundError, StorageError


class InMemoryStorage:
    """Dict-backed ObjectStorage used to exercise full request round trips."""

    def __init__(self, bucket: str = "test-bucket", presign_fails: bool = False):
        self.bucket = bucket
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.presign_fails = presign_fails

    def put(self, key: str, data: bytes, content_type: str) -> None:
        self.objects[key] = (bytes(data), content_type)

    def get(self, key: str) -> bytes:
        if key not in self.objects:
            raise ObjectNotFoundError("get", self.bucket, key, "The specified key does not exist.")
        return self.objects[key][0]

    def delete(self, key: str) -> None:
        self.objects.pop(key, None)

    def list(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self.objects if k.startswith(prefix))

    def list_page(self, prefix: str = "", limit: int = 100, cursor: str = "") -> ListPage:
        if limit < 1:
            raise ValueError("limit must be a positive integer")
        remaining = [k for k in self.list(prefix) if k > cursor]
        keys = remaining[:limit]
        has_more = len(remaining) > limit
        return ListPage(keys=keys, next_cursor=keys[-1] if has_more else "", has_more=has_more)

    def ping(self) -> None:
        return None

    def presign(self, key: str, ttl_minutes: int = 60) -> str:
        if self.presign_fails:
            raise StorageError("presign", self.bucket, key, "signing unavailable")
        return f"https://storage.example/{self.bucket}/{key}?X-Amz-Expires={ttl_minutes * 60}"


def make_settings(**overrides) -> Settings:
    """Settings isolated from the process environment and any .env file."""
    values = {
        "R2_ACCOUNT_ID": "",
        "R2_ACCESS_KEY_ID": "",
        "R2_SECRET_ACCESS_KEY": "",
        "R2_BUCKET_NAME": "",
        "R2_ENDPOINT": "",
        "AUTH_USERNAME": "",
        "AUTH_PASSWORD": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def memory_storage():
    return InMemoryStorage()


@pytest.fixture
def mock_storage():
    """Create a mock storage client."""
    storage = MagicMock()
    storage.bucket = "test-bucket"
    storage.get = MagicMock(return_value=b"test")
    storage.list = MagicMock(return_value=[])
    storage.presign = MagicMock(return_value="https://signed-url")
    return storage


@pytest.fixture
def client(memory_storage):
    """Client for an app wired to the in-memory store with auth disabled."""
    app = create_app(settings=make_settings(), storage=memory_storage)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def unconfigured_client():
    """Client for an app with no storage credentials."""
    app = create_app(settings=make_settings())
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
