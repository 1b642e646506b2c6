"""
Role repository for database access.

Encapsulates Supabase queries against the roles table.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .models import Role


class RoleRepository(BaseRepository[Role]):
    """Read access to the roles master table."""

    def list_active_by_code(self, code: str) -> list[Role]:
        """
        Get active roles carrying a code, lowest ID first.

        The code column is unique in the reference schema, but the
        ordering keeps the result deterministic if that ever drifts.
        """
        result = (
            self._db.table("roles")
            .select("*")
            .eq("code", code)
            .eq("is_active", True)
            .order("id")
            .execute()
        )
        return [self._map_to_role(row) for row in result.data]

    def get_by_id(self, role_id: int) -> Optional[Role]:
        """Get a role by ID, or None if it doesn't exist."""
        result = self._db.table("roles").select("*").eq("id", role_id).execute()
        if not result.data:
            return None
        return self._map_to_role(result.data[0])

    def list_active(self) -> list[Role]:
        """List active roles ordered by permission level."""
        result = (
            self._db.table("roles")
            .select("*")
            .eq("is_active", True)
            .order("permission_level")
            .execute()
        )
        return [self._map_to_role(row) for row in result.data]

    def _map_to_role(self, data: dict[str, Any]) -> Role:
        """Map database row to Role model."""
        return Role(
            id=int(data["id"]),
            code=data["code"],
            name=data["name"],
            description=data.get("description"),
            permission_level=data.get("permission_level", 0),
            is_active=data.get("is_active", True),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
