"""
Base exception classes for the profile sync backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class ProfileSyncError(Exception):
    """
    Base exception for all profile sync errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(ProfileSyncError):
    """Resource not found."""

    pass


class ValidationError(ProfileSyncError):
    """Input validation failed."""

    pass


class AuthenticationError(ProfileSyncError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(ProfileSyncError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConfigurationError(ProfileSyncError):
    """
    Required configuration is missing or unusable.

    Raised for every request until an operator fixes the environment
    or the seed data, so callers should surface it as a server error.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code or "CONFIGURATION_ERROR", details)


class ExternalServiceError(ProfileSyncError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
