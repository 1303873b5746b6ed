"""Tests for status endpoints."""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from app.main import create_app
from app.storage.contracts import StorageError
from tests.conftest import make_settings


class TestRootEndpoint:
    """Tests for / liveness endpoint."""

    def test_root_returns_running(self, client):
        """Root endpoint returns 200 with status running."""
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "Image Storage API", "status": "running"}


class TestReadinessEndpoint:
    """Tests for /health/ready readiness endpoint."""

    def test_readiness_ok(self):
        """Readiness returns 200 when the bucket is reachable."""
        storage = MagicMock()
        app = create_app(settings=make_settings(), storage=storage)

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "checks": {"storage": "ok"}}
        storage.ping.assert_called_once()

    def test_readiness_storage_failure(self):
        """Readiness returns 503 when the bucket cannot be reached."""
        storage = MagicMock()
        storage.ping.side_effect = StorageError("ping", "test-bucket", None, "Connection refused")
        app = create_app(settings=make_settings(), storage=storage)

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/health/ready")

        assert response.status_code == 503
        assert "Connection refused" in response.json()["checks"]["storage"]

    def test_readiness_storage_not_configured(self, unconfigured_client):
        """Readiness returns 503 when storage is not configured."""
        response = unconfigured_client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["checks"]["storage"] == "not configured"
