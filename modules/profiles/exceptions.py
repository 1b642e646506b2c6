"""
Profiles module exceptions.

These exceptions are raised by the profiles module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError, NotFoundError
from shared.repository import CONSTRAINT_VIOLATIONS


class ProfileNotFoundError(NotFoundError):
    """Raised when no profile exists for an identity."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Profile not found for user_id: {user_id}",
            code="PROFILE_NOT_FOUND",
            details={"user_id": user_id},
        )


class ProfileStoreError(ExternalServiceError):
    """
    Raised when the profiles table rejects or fails an operation.

    db_code carries the PostgreSQL SQLSTATE when the store reported one,
    e.g. 23505 for a unique violation outside the idempotent insert path.
    """

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        db_code: Optional[str] = None,
        db_error: Optional[str] = None,
    ):
        details = {}
        if user_id:
            details["user_id"] = user_id
        if db_code:
            details["db_code"] = db_code
        if db_error:
            details["db_error"] = db_error
        super().__init__(
            message,
            service="supabase",
            code="PROFILE_CONSTRAINT_VIOLATION" if db_code in CONSTRAINT_VIOLATIONS else "PROFILE_STORE_ERROR",
            details=details,
        )
        self.db_code = db_code
