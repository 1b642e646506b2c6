"""
Tests for JWT authentication middleware.
"""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_auth_service

from tests.conftest import create_test_token, make_auth_service, make_settings


@pytest.fixture
def app():
    app = create_app()
    yield app
    app.dependency_overrides.clear()


class TestAuthentication:
    """Authentication is exercised through GET /api/users/me."""

    def test_missing_header(self, app):
        """Requests without a bearer token are rejected."""
        app.dependency_overrides[get_auth_service] = lambda: make_auth_service("user")
        client = TestClient(app)

        response = client.get("/api/users/me")

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing authorization header"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_expired_token(self, app):
        """Expired tokens are rejected with a clear message."""
        app.dependency_overrides[get_auth_service] = lambda: make_auth_service("user")
        client = TestClient(app)

        token = create_test_token(expired=True)
        response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert "expired" in response.json()["detail"].lower()

    def test_invalid_token(self, app):
        app.dependency_overrides[get_auth_service] = lambda: make_auth_service("user")
        client = TestClient(app)

        response = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401

    def test_token_signed_with_other_secret(self, app):
        app.dependency_overrides[get_auth_service] = lambda: make_auth_service("user")
        client = TestClient(app)

        token = create_test_token(secret="some-other-secret")
        response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_unconfigured_secret_is_500(self, app):
        """A server without a JWT secret reports a server error, not a bad token."""
        settings = make_settings(supabase_jwt_secret="")
        app.dependency_overrides[get_auth_service] = lambda: make_auth_service("user", settings)
        client = TestClient(app)

        response = client.get("/api/users/me", headers={"Authorization": f"Bearer {create_test_token()}"})

        assert response.status_code == 500
