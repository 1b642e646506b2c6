"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import json
import time
from datetime import datetime, timezone, timedelta
from typing import Any, Optional

import jwt  # PyJWT
import pytest
from postgrest.exceptions import APIError

from api.dependencies import reset_container
from modules.profiles.models import Profile, ProfileListItem
from shared.config import Settings, get_settings
from shared.database import reset_client_cache


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

# Svix-style signing secret: "whsec_" + base64("profile-sync-test-signing-key-32b")
TEST_WEBHOOK_SECRET = "whsec_cHJvZmlsZS1zeW5jLXRlc3Qtc2lnbmluZy1rZXktMzJi"

TEST_TIMESTAMP = "2023-11-14T22:13:20+00:00"  # 1700000000000 ms


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified
        secret: Key to sign the token with

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def make_settings(**overrides: Any) -> Settings:
    """Build fully configured settings without reading the environment file."""
    values = {
        "supabase_url": "https://test.supabase.co",
        "supabase_service_role_key": "test-service-role-key",
        "supabase_jwt_secret": TEST_JWT_SECRET,
        "clerk_webhook_signing_secret": TEST_WEBHOOK_SECRET,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def signed_delivery(
    event: dict[str, Any],
    message_id: str = "msg_test_123",
    timestamp: Optional[int] = None,
    secret: str = TEST_WEBHOOK_SECRET,
) -> tuple[bytes, dict[str, str]]:
    """
    Serialize an event and sign it the way Svix does.

    Returns:
        The raw body and the svix-* headers for it
    """
    from modules.webhooks.verification import WebhookVerifier

    body = json.dumps(event).encode("utf-8")
    ts = int(time.time()) if timestamp is None else timestamp
    signature = WebhookVerifier(secret).sign(message_id, ts, body)
    headers = {
        "svix-id": message_id,
        "svix-timestamp": str(ts),
        "svix-signature": f"v1,{signature}",
        "content-type": "application/json",
    }
    return body, headers


def make_role_row(role_id: int = 7, code: str = "user", **overrides: Any) -> dict[str, Any]:
    """Build a roles table row."""
    row = {
        "id": role_id,
        "code": code,
        "name": code.title(),
        "description": None,
        "permission_level": 0,
        "is_active": True,
        "created_at": TEST_TIMESTAMP,
        "updated_at": TEST_TIMESTAMP,
    }
    row.update(overrides)
    return row


def make_profile_row(user_id: str = "user_123", role_id: int = 7, **overrides: Any) -> dict[str, Any]:
    """Build a profiles table row."""
    row = {
        "id": f"profile-{user_id}",
        "user_id": user_id,
        "role_id": role_id,
        "username": None,
        "full_name": user_id,
        "avatar_url": None,
        "is_active": True,
        "created_at": TEST_TIMESTAMP,
        "updated_at": TEST_TIMESTAMP,
    }
    row.update(overrides)
    return row


def unique_violation(constraint: str = "profiles_user_id_key") -> APIError:
    return APIError({
        "code": "23505",
        "message": f'duplicate key value violates unique constraint "{constraint}"',
    })


def _as_datetime(value: Any) -> datetime:
    return value if isinstance(value, datetime) else datetime.fromisoformat(value)


class InMemoryProfileRepository:
    """Profile store with unique user_id and username, like the real table."""

    def __init__(self) -> None:
        self.rows: dict[str, dict[str, Any]] = {}
        self.inserts = 0

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        row = self.rows.get(user_id)
        return Profile(**row) if row else None

    def insert_if_absent(self, data: dict[str, Any]) -> Optional[Profile]:
        if data["user_id"] in self.rows:
            return None
        username = data.get("username")
        if username and any(r["username"] == username for r in self.rows.values()):
            raise unique_violation("profiles_username_key")
        self.inserts += 1
        row = {"id": f"profile-{self.inserts}", **data}
        self.rows[data["user_id"]] = row
        return Profile(**row)

    def update_by_user_id(
        self,
        user_id: str,
        data: dict[str, Any],
        not_newer_than: Optional[str] = None,
    ) -> Optional[Profile]:
        if user_id not in self.rows:
            return None
        stored = self.rows[user_id]["updated_at"]
        if not_newer_than is not None and _as_datetime(stored) > _as_datetime(not_newer_than):
            return None
        self.rows[user_id].update(data)
        return Profile(**self.rows[user_id])

    def list_profiles(self, page=1, page_size=20, search=None, include_inactive=False):
        rows = [r for r in self.rows.values() if include_inactive or r["is_active"]]
        if search:
            rows = [r for r in rows if search.lower() in (r["full_name"] or "").lower()]
        start = (page - 1) * page_size
        items = [ProfileListItem(**{k: r[k] for k in ProfileListItem.model_fields}) for r in rows]
        return items[start:start + page_size], len(rows)


def make_auth_service(role_code: Optional[str] = "admin", settings: Optional[Settings] = None):
    """
    Build a real AuthService whose caller holds the given role.

    Args:
        role_code: Role code of the caller's profile, or None for a
            caller without a local profile
        settings: Settings to validate tokens with
    """
    from unittest.mock import AsyncMock

    from modules.auth.service import AuthService
    from modules.roles.models import Role

    profiles = AsyncMock()
    roles = AsyncMock()
    if role_code is None:
        profiles.find_profile.return_value = None
    else:
        profiles.find_profile.return_value = Profile(**make_profile_row("test-user-123", role_id=1))
        roles.get_role.return_value = Role(id=1, code=role_code, name=role_code.title())
    return AuthService(settings=settings or make_settings(), profiles=profiles, roles=roles)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, clients and services around each test."""
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()


@pytest.fixture
def settings() -> Settings:
    """Fully configured settings."""
    return make_settings()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
