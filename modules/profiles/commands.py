"""
Canonical identity commands.

Provider events are normalized into exactly one of these before they
reach the reconciler. The kind field is the union discriminator.
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CreateProfile(BaseModel):
    """An identity was created upstream."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["create"] = "create"
    external_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: str
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UpdateProfile(BaseModel):
    """An identity's profile fields changed upstream."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["update"] = "update"
    external_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: str
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    updated_at: datetime


class DeactivateProfile(BaseModel):
    """An identity was deleted upstream."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["deactivate"] = "deactivate"
    external_id: str
    deleted_at: datetime


class Unhandled(BaseModel):
    """An event type this service does not act on."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unhandled"] = "unhandled"
    event_type: str
    raw_payload: dict[str, Any] = Field(default_factory=dict)


ProfileCommand = Annotated[
    Union[CreateProfile, UpdateProfile, DeactivateProfile, Unhandled],
    Field(discriminator="kind"),
]
