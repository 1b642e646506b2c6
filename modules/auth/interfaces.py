"""
Authentication module interface.

The HTTP layer depends on IAuthService, not the concrete implementation.
"""

from typing import Protocol, Optional, runtime_checkable

from modules.profiles.models import Profile
from shared.models import AuthenticatedUser


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.
    """

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        The user's role is the code of the role their local profile
        references, or the default role code when they have no active
        profile.

        Args:
            token: JWT access token from Supabase Auth

        Returns:
            AuthenticatedUser with user ID, email and role

        Raises:
            AuthenticationError: If token is invalid or expired
            ConfigurationError: If no JWT secret is configured
        """
        ...

    async def get_user_by_id(self, user_id: str) -> Optional[Profile]:
        """
        Get a user's local profile by their ID.

        Args:
            user_id: Token subject, matched against profiles.user_id

        Returns:
            Profile if found, None otherwise
        """
        ...

    def require_admin(self, user: AuthenticatedUser) -> None:
        """
        Ensure the user holds one of the configured admin roles.

        Raises:
            InsufficientPermissionsError: If they don't
        """
        ...
