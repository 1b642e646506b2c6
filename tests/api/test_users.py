"""Tests for user endpoints."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_auth_service

from tests.conftest import make_auth_service


@pytest.fixture
def app():
    app = create_app()
    yield app
    app.dependency_overrides.clear()


class TestGetMe:
    """Tests for GET /api/users/me"""

    def test_with_profile(self, app, auth_headers):
        """Should return identity, resolved role and the local profile."""
        app.dependency_overrides[get_auth_service] = lambda: make_auth_service("admin")
        client = TestClient(app)

        response = client.get("/api/users/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "test-user-123"
        assert data["email"] == "test@example.com"
        assert data["email_verified"] is True
        assert data["role"] == "admin"
        assert data["profile"]["user_id"] == "test-user-123"

    def test_without_profile(self, app, auth_headers):
        """Before the webhook lands the caller has the default role and no profile."""
        app.dependency_overrides[get_auth_service] = lambda: make_auth_service(None)
        client = TestClient(app)

        response = client.get("/api/users/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["role"] == "user"
        assert response.json()["profile"] is None
