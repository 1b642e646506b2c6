"""
Authentication service implementation.

Validates Supabase JWT tokens and resolves the caller's role from
their local profile.
"""

from datetime import datetime, timezone
from typing import Optional
import jwt

from modules.profiles.interfaces import IProfileService
from modules.profiles.models import Profile
from modules.roles.interfaces import IRoleResolver
from shared.config import Settings
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import JWTPayload
from .exceptions import (
    AuthNotConfiguredError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InsufficientPermissionsError,
)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase JWT tokens for authentication and the profiles and
    roles tables for authorization.
    """

    def __init__(
        self,
        settings: Settings,
        profiles: IProfileService,
        roles: IRoleResolver,
    ):
        self._settings = settings
        self._profiles = profiles
        self._roles = roles

    async def validate_token(self, token: str) -> AuthenticatedUser:
        if not token:
            raise MissingTokenError()

        if not self._settings.supabase_jwt_secret:
            raise AuthNotConfiguredError()

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
            jwt_payload = JWTPayload(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

        return AuthenticatedUser(
            id=jwt_payload.sub,
            email=jwt_payload.email,
            email_verified=jwt_payload.email_confirmed_at is not None,
            last_sign_in=datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc),
            role=await self._resolve_role_code(jwt_payload.sub),
        )

    async def get_user_by_id(self, user_id: str) -> Optional[Profile]:
        return await self._profiles.find_profile(user_id)

    def require_admin(self, user: AuthenticatedUser) -> None:
        if user.role not in self._settings.admin_role_codes:
            raise InsufficientPermissionsError(
                admin_role_codes=self._settings.admin_role_codes,
                role_code=user.role,
            )

    async def _resolve_role_code(self, user_id: str) -> str:
        profile = await self._profiles.find_profile(user_id)
        if profile is None or not profile.is_active:
            return self._settings.default_role_code

        role = await self._roles.get_role(profile.role_id)
        if role is None or not role.is_active:
            return self._settings.default_role_code
        return role.code
