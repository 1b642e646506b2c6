"""
Profile repository for database access.

Encapsulates all Supabase queries and data mapping for the profiles table.
Every write is keyed by user_id, the unique join key to the identity
provider.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .models import Profile, ProfileListItem


class ProfileRepository(BaseRepository[Profile]):
    """
    Repository for profile data access.

    PostgREST errors (postgrest.exceptions.APIError) are not caught here;
    the service layer decides which of them are expected.
    """

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        """
        Get a profile by identity-provider user ID.

        Args:
            user_id: The external user ID.

        Returns:
            The profile, active or not, or None if it doesn't exist.
        """
        result = (
            self._db.table("profiles")
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_profile(result.data[0])

    def list_profiles(
        self,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        include_inactive: bool = False,
    ) -> tuple[list[ProfileListItem], int]:
        """
        List profiles, most recently updated first.

        Args:
            page: Page number (1-indexed).
            page_size: Items per page.
            search: Optional case-insensitive substring of full_name.
            include_inactive: Whether to include deactivated profiles.

        Returns:
            The page of profiles and the total number of matches.
        """
        offset = (page - 1) * page_size

        query = self._db.table("profiles").select("*", count="exact")
        if not include_inactive:
            query = query.eq("is_active", True)
        if search:
            query = query.ilike("full_name", f"%{search}%")

        result = (
            query.order("updated_at", desc=True)
            .range(offset, offset + page_size - 1)
            .execute()
        )

        items = [self._map_to_list_item(row) for row in result.data]
        return items, result.count or 0

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert_if_absent(self, data: dict[str, Any]) -> Optional[Profile]:
        """
        Insert a profile unless one already exists for its user_id.

        Uses a conflict-ignoring upsert so the existence check and the
        insert happen in one statement.

        Args:
            data: Column values, including user_id and role_id.

        Returns:
            The inserted profile, or None if the user_id was already present.
        """
        result = (
            self._db.table("profiles")
            .upsert(data, on_conflict="user_id", ignore_duplicates=True)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_profile(result.data[0])

    def update_by_user_id(
        self,
        user_id: str,
        data: dict[str, Any],
        not_newer_than: Optional[str] = None,
    ) -> Optional[Profile]:
        """
        Update the profile for a user_id.

        Args:
            user_id: The external user ID.
            data: Columns to set.
            not_newer_than: ISO timestamp; when given, only a row whose
                updated_at is at or before it is touched.

        Returns:
            The updated profile, or None if no row matched.
        """
        query = self._db.table("profiles").update(data).eq("user_id", user_id)
        if not_newer_than is not None:
            query = query.lte("updated_at", not_newer_than)
        result = query.execute()
        if not result.data:
            return None
        return self._map_to_profile(result.data[0])

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_profile(self, data: dict[str, Any]) -> Profile:
        """Map database row to Profile model."""
        return Profile(
            id=str(data["id"]),
            user_id=data["user_id"],
            role_id=int(data["role_id"]),
            username=data.get("username"),
            full_name=data.get("full_name"),
            avatar_url=data.get("avatar_url"),
            is_active=data.get("is_active", True),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )

    def _map_to_list_item(self, data: dict[str, Any]) -> ProfileListItem:
        """Map database row to ProfileListItem model."""
        return ProfileListItem(
            user_id=data["user_id"],
            username=data.get("username"),
            full_name=data.get("full_name"),
            role_id=int(data["role_id"]),
            is_active=data.get("is_active", True),
            updated_at=data["updated_at"],
        )
