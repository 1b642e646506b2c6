"""
Profiles module data models.

These models define the local profile record and the outcome of
applying an identity command to it.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Profile(BaseModel):
    """
    A local profile mirroring an identity-provider user.

    Profiles are never physically deleted; deletion events clear is_active.
    """

    id: str = Field(..., description="Profile ID (UUID, store generated)")
    user_id: str = Field(..., description="Identity-provider user ID (unique)")
    role_id: int = Field(..., description="Role assigned to the profile")
    username: Optional[str] = Field(None, description="Unique username, if valid")
    full_name: Optional[str] = Field(None, description="Display name")
    avatar_url: Optional[str] = Field(None, description="Avatar URL")
    is_active: bool = Field(default=True, description="False once the identity is deleted")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last update time")


class ReconcileAction(str, Enum):
    """What applying an identity command did to the profile store."""

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    UPDATED = "updated"
    STALE = "stale"
    DEACTIVATED = "deactivated"
    NOT_FOUND = "not_found"
    IGNORED = "ignored"


class ReconcileResult(BaseModel):
    """Outcome of reconciling a single identity command."""

    action: ReconcileAction = Field(..., description="Transition that was applied")
    user_id: Optional[str] = Field(None, description="Identity the command targeted")
    profile: Optional[Profile] = Field(None, description="Affected profile, if any")
    event_type: Optional[str] = Field(None, description="Event type for ignored events")

    @property
    def succeeded(self) -> bool:
        """Whether the store now reflects the command."""
        return self.action not in (ReconcileAction.NOT_FOUND, ReconcileAction.IGNORED)


class ProfileListItem(BaseModel):
    """Summary of a profile for list views."""

    user_id: str = Field(..., description="Identity-provider user ID")
    username: Optional[str] = Field(None, description="Username")
    full_name: Optional[str] = Field(None, description="Display name")
    role_id: int = Field(..., description="Role ID")
    is_active: bool = Field(..., description="Whether the profile is active")
    updated_at: datetime = Field(..., description="Last update time")


class ProfileListResponse(BaseModel):
    """Paginated list of profiles."""

    profiles: list[ProfileListItem] = Field(..., description="Profiles on this page")
    total: int = Field(..., description="Total matching profiles")
    page: int = Field(..., description="Current page (1-indexed)")
    page_size: int = Field(..., description="Items per page")
    has_more: bool = Field(..., description="Whether more pages exist")
