"""Tests for optional HTTP Basic Auth."""

import base64

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from tests.conftest import make_settings


@pytest.fixture
def auth_client(memory_storage):
    settings = make_settings(AUTH_USERNAME="admin", AUTH_PASSWORD="s3cret")
    app = create_app(settings=settings, storage=memory_storage)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


class TestBasicAuth:
    """Basic Auth is enforced on every route once credentials are configured."""

    @pytest.mark.parametrize("path", ["/", "/api/images", "/api/images/images/1_a.png"])
    def test_missing_credentials_rejected(self, auth_client, path):
        response = auth_client.get(path)

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert response.headers["www-authenticate"].lower().startswith("basic")

    def test_wrong_password_rejected(self, auth_client):
        response = auth_client.get("/api/images", auth=("admin", "nope"))

        assert response.status_code == 401

    def test_wrong_username_rejected(self, auth_client):
        response = auth_client.get("/api/images", auth=("root", "s3cret"))

        assert response.status_code == 401

    def test_valid_credentials_accepted(self, auth_client):
        response = auth_client.get("/api/images", auth=("admin", "s3cret"))

        assert response.status_code == 200
        assert response.json() == {"images": [], "count": 0}

    def test_auth_checked_before_storage_configuration(self):
        app = create_app(settings=make_settings(AUTH_USERNAME="admin", AUTH_PASSWORD="s3cret"))

        with TestClient(app, raise_server_exceptions=False) as client:
            assert client.get("/api/images").status_code == 401
            assert client.get("/api/images", auth=("admin", "s3cret")).status_code == 503

    def test_only_username_leaves_auth_disabled(self, memory_storage):
        app = create_app(settings=make_settings(AUTH_USERNAME="admin"), storage=memory_storage)

        with TestClient(app, raise_server_exceptions=False) as client:
            assert client.get("/api/images").status_code == 200


def _basic_header(raw: bytes) -> dict:
    return {"Authorization": "Basic " + base64.b64encode(raw).decode("ascii")}


class TestAuthDisabledIgnoresHeaders:
    """With no credentials configured, Authorization headers are never parsed."""

    @pytest.mark.parametrize(
        "headers",
        [
            {"Authorization": "Basic !!!notbase64"},
            {"Authorization": "Basic " + base64.b64encode(b"nocolon").decode("ascii")},
            _basic_header("josé:pässword".encode("utf-8")),
            {"Authorization": "Bearer some-token"},
        ],
    )
    @pytest.mark.parametrize("path", ["/", "/api/images"])
    def test_odd_headers_pass(self, client, headers, path):
        response = client.get(path, headers=headers)

        assert response.status_code == 200


class TestMalformedCredentials:
    """Unparsable Basic headers are rejected in the standard error shape."""

    @pytest.mark.parametrize(
        "headers",
        [
            {"Authorization": "Basic !!!notbase64"},
            {"Authorization": "Basic " + base64.b64encode(b"nocolon").decode("ascii")},
            {"Authorization": "Basic nocolon"},
            _basic_header("josé:pässword".encode("utf-8")),
        ],
    )
    def test_malformed_header_is_unauthorized(self, auth_client, headers):
        response = auth_client.get("/api/images", headers=headers)

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert response.headers["www-authenticate"].lower().startswith("basic")
