"""
Roles module data models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Role(BaseModel):
    """
    A row of the roles master table.

    The code is the stable machine key profiles are provisioned against.
    """

    id: int = Field(..., description="Role ID")
    code: str = Field(..., description="Stable machine key (e.g. 'user', 'admin')")
    name: str = Field(..., description="Display name")
    description: Optional[str] = Field(None, description="Role description")
    permission_level: int = Field(default=0, description="Relative privilege level")
    is_active: bool = Field(default=True, description="Whether the role can be assigned")
    created_at: Optional[datetime] = Field(None, description="Creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")


class RoleListResponse(BaseModel):
    """API response for the role listing."""

    roles: list[Role] = Field(..., description="Active roles")
