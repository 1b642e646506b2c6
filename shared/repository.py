"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the translation of PostgREST errors.
"""

from typing import TypeVar, Generic

import httpx
from postgrest.exceptions import APIError
from supabase import Client


T = TypeVar("T")

# PostgreSQL SQLSTATE codes surfaced by PostgREST
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"

CONSTRAINT_VIOLATIONS = frozenset({UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION, CHECK_VIOLATION})

# Failures the Supabase client raises: PostgREST rejections and transport errors
STORE_ERRORS = (APIError, httpx.HTTPError)


def describe_store_error(error: Exception) -> str:
    """Short description of a store failure, safe to put in error details."""
    if isinstance(error, APIError):
        return error.message
    return f"{type(error).__name__}: {error}"


def is_unique_violation(error: APIError) -> bool:
    """Whether a PostgREST error is a duplicate-key violation."""
    return error.code == UNIQUE_VIOLATION


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class RoleRepository(BaseRepository[Role]):
            def get_by_id(self, role_id: int) -> Optional[Role]:
                result = self._db.table("roles").select("*").eq("id", role_id).execute()
                if not result.data:
                    return None
                return self._map_to_role(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db
