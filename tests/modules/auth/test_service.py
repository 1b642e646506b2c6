import pytest
from unittest.mock import AsyncMock
import jwt
from datetime import datetime, timedelta, timezone

from modules.auth.interfaces import IAuthService
from modules.auth.service import AuthService
from modules.auth.exceptions import (
    AuthNotConfiguredError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InsufficientPermissionsError,
)
from modules.profiles.models import Profile
from modules.roles.models import Role
from shared.exceptions import ConfigurationError
from shared.models import AuthenticatedUser

from tests.conftest import make_profile_row, make_settings


class TestAuthService:
    @pytest.fixture
    def profiles(self):
        profiles = AsyncMock()
        profiles.find_profile.return_value = None
        return profiles

    @pytest.fixture
    def roles(self):
        return AsyncMock()

    @pytest.fixture
    def service(self, profiles, roles):
        """Create auth service with mocked lookups."""
        return AuthService(
            settings=make_settings(supabase_jwt_secret="test-secret"),
            profiles=profiles,
            roles=roles,
        )

    @pytest.fixture
    def valid_token(self):
        """Create a valid JWT token."""
        payload = {
            "sub": "user-123",
            "email": "test@example.com",
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
            "iat": datetime.now(timezone.utc),
            "aud": "authenticated",
            "role": "authenticated",
        }
        return jwt.encode(payload, "test-secret", algorithm="HS256")

    @pytest.fixture
    def expired_token(self):
        """Create an expired JWT token."""
        payload = {
            "sub": "user-123",
            "email": "test@example.com",
            "exp": datetime.now(timezone.utc) - timedelta(hours=1),
            "iat": datetime.now(timezone.utc) - timedelta(hours=2),
            "aud": "authenticated",
            "role": "authenticated",
        }
        return jwt.encode(payload, "test-secret", algorithm="HS256")

    @pytest.mark.asyncio
    async def test_validate_valid_token(self, service, valid_token):
        """Should validate a valid token and return user."""
        user = await service.validate_token(valid_token)
        assert user.id == "user-123"
        assert user.email == "test@example.com"
        assert user.email_verified is False

    @pytest.mark.asyncio
    async def test_validate_expired_token(self, service, expired_token):
        """Should raise ExpiredTokenError for expired token."""
        with pytest.raises(ExpiredTokenError) as exc_info:
            await service.validate_token(expired_token)
        assert exc_info.value.code == "TOKEN_EXPIRED"

    @pytest.mark.asyncio
    async def test_validate_invalid_token(self, service):
        """Should raise InvalidTokenError for malformed token."""
        with pytest.raises(InvalidTokenError):
            await service.validate_token("not-a-valid-token")

    @pytest.mark.asyncio
    async def test_validate_missing_token(self, service):
        """Should raise MissingTokenError for empty token."""
        with pytest.raises(MissingTokenError):
            await service.validate_token("")

    @pytest.mark.asyncio
    async def test_validate_none_token(self, service):
        """Should raise MissingTokenError for None token."""
        with pytest.raises(MissingTokenError):
            await service.validate_token(None)

    @pytest.mark.asyncio
    async def test_validate_wrong_secret(self, service):
        """Should raise InvalidTokenError for token signed with wrong secret."""
        payload = {
            "sub": "user-123",
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
            "iat": datetime.now(timezone.utc),
            "aud": "authenticated",
        }
        wrong_secret_token = jwt.encode(payload, "wrong-secret", algorithm="HS256")
        with pytest.raises(InvalidTokenError) as exc_info:
            await service.validate_token(wrong_secret_token)
        assert exc_info.value.code == "INVALID_TOKEN"
        assert exc_info.value.details["reason"] == "Signature verification failed"
        assert exc_info.value.message.startswith("Invalid Supabase session token")

    @pytest.mark.asyncio
    async def test_validate_wrong_audience(self, service):
        """Should raise InvalidTokenError for token with wrong audience."""
        payload = {
            "sub": "user-123",
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
            "iat": datetime.now(timezone.utc),
            "aud": "wrong-audience",
        }
        wrong_aud_token = jwt.encode(payload, "test-secret", algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            await service.validate_token(wrong_aud_token)

    @pytest.mark.asyncio
    async def test_validate_without_secret(self, profiles, roles, valid_token):
        """A missing JWT secret is a server configuration problem."""
        service = AuthService(make_settings(supabase_jwt_secret=""), profiles, roles)
        with pytest.raises(AuthNotConfiguredError) as exc_info:
            await service.validate_token(valid_token)
        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.code == "AUTH_NOT_CONFIGURED"
        assert exc_info.value.details == {"missing": ["SUPABASE_JWT_SECRET"]}


class TestRoleResolution:
    @pytest.fixture
    def profile(self):
        return Profile(**make_profile_row("user-123", role_id=1))

    @pytest.mark.asyncio
    async def test_role_from_profile(self, profile):
        """The caller's role is their profile's role code."""
        profiles = AsyncMock()
        profiles.find_profile.return_value = profile
        roles = AsyncMock()
        roles.get_role.return_value = Role(id=1, code="admin", name="Admin")
        service = AuthService(make_settings(), profiles, roles)

        assert await service._resolve_role_code("user-123") == "admin"
        roles.get_role.assert_awaited_once_with(1)

    @pytest.mark.asyncio
    async def test_default_role_without_profile(self):
        profiles = AsyncMock()
        profiles.find_profile.return_value = None
        service = AuthService(make_settings(default_role_code="member"), profiles, AsyncMock())

        assert await service._resolve_role_code("user-123") == "member"

    @pytest.mark.asyncio
    async def test_default_role_for_deactivated_profile(self):
        """Deactivated profiles lose their elevated role."""
        profiles = AsyncMock()
        profiles.find_profile.return_value = Profile(**make_profile_row("user-123", role_id=1, is_active=False))
        roles = AsyncMock()
        service = AuthService(make_settings(), profiles, roles)

        assert await service._resolve_role_code("user-123") == "user"
        roles.get_role.assert_not_called()

    @pytest.mark.asyncio
    async def test_default_role_for_inactive_role(self, profile):
        profiles = AsyncMock()
        profiles.find_profile.return_value = profile
        roles = AsyncMock()
        roles.get_role.return_value = Role(id=1, code="admin", name="Admin", is_active=False)
        service = AuthService(make_settings(), profiles, roles)

        assert await service._resolve_role_code("user-123") == "user"

    @pytest.mark.asyncio
    async def test_get_user_by_id(self, profile):
        profiles = AsyncMock()
        profiles.find_profile.return_value = profile
        service = AuthService(make_settings(), profiles, AsyncMock())

        assert await service.get_user_by_id("user-123") is profile


class TestRequireAdmin:
    def test_admin_passes(self):
        service = AuthService(make_settings(), AsyncMock(), AsyncMock())
        service.require_admin(AuthenticatedUser(id="user-123", role="admin"))

    def test_other_roles_refused(self):
        service = AuthService(make_settings(admin_role_codes=["admin", "owner"]), AsyncMock(), AsyncMock())

        with pytest.raises(InsufficientPermissionsError) as exc_info:
            service.require_admin(AuthenticatedUser(id="user-123", role="user"))

        assert exc_info.value.code == "INSUFFICIENT_PERMISSIONS"
        assert exc_info.value.details == {"admin_role_codes": ["admin", "owner"], "role_code": "user"}
        assert exc_info.value.message == "Admin role required (admin, owner), caller has 'user'"

    def test_implements_interface(self):
        assert isinstance(AuthService(make_settings(), AsyncMock(), AsyncMock()), IAuthService)
