"""
Roles module exceptions.
"""

from typing import Optional

from shared.exceptions import ConfigurationError, ExternalServiceError


class DefaultRoleNotFoundError(ConfigurationError):
    """
    Raised when no active role carries the default code.

    Profiles cannot be provisioned until an operator seeds or re-activates
    the role, so this is a configuration problem rather than a bad event.
    """

    def __init__(self, code: str):
        super().__init__(
            f"Failed to get default role: no active role with code '{code}'",
            code="DEFAULT_ROLE_NOT_FOUND",
            details={"role_code": code},
        )


class RoleStoreError(ExternalServiceError):
    """Raised when the roles table cannot be read."""

    def __init__(self, message: str, db_error: Optional[str] = None):
        super().__init__(
            message,
            service="supabase",
            code="ROLE_STORE_ERROR",
            details={"db_error": db_error} if db_error else {},
        )
