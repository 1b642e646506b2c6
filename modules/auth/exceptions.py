"""
Authentication module exceptions.

Token errors cover the Supabase session JWT sent by admin API callers;
authorization errors cover the role resolved from the caller's profile.
"""

from shared.exceptions import AuthenticationError, AuthorizationError, ConfigurationError


class AuthNotConfiguredError(ConfigurationError):
    """Raised when SUPABASE_JWT_SECRET is unset, so no token can be checked."""

    def __init__(self):
        super().__init__(
            "Server authentication not configured. Set SUPABASE_JWT_SECRET.",
            code="AUTH_NOT_CONFIGURED",
            details={"missing": ["SUPABASE_JWT_SECRET"]},
        )


class MissingTokenError(AuthenticationError):
    """Raised when the request carries no bearer token."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidTokenError(AuthenticationError):
    """Raised when a Supabase JWT fails signature, audience or claim checks."""

    def __init__(self, reason: str = "malformed token"):
        super().__init__(
            f"Invalid Supabase session token: {reason}",
            code="INVALID_TOKEN",
            details={"reason": reason},
        )


class ExpiredTokenError(AuthenticationError):
    """Raised when a Supabase JWT is past its exp claim."""

    def __init__(self):
        super().__init__("Supabase session token has expired", code="TOKEN_EXPIRED")


class InsufficientPermissionsError(AuthorizationError):
    """
    Raised when the caller's role is not one of the admin role codes.

    role_code is the code resolved from the caller's profile, which is the
    default role code for callers without an active profile.
    """

    def __init__(self, admin_role_codes: list[str], role_code: str):
        super().__init__(
            f"Admin role required ({', '.join(admin_role_codes)}), caller has '{role_code}'",
            code="INSUFFICIENT_PERMISSIONS",
            details={"admin_role_codes": list(admin_role_codes), "role_code": role_code},
        )
