"""
Webhooks module data models.

Clerk delivers an envelope {type, data, object, timestamp}; the shape of
data depends on type. Only the fields the reconciler uses are modelled.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from modules.profiles.models import Profile, ReconcileAction


class WebhookEvent(BaseModel):
    """A verified webhook envelope."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(..., description="Event type, e.g. 'user.created'")
    data: dict[str, Any] = Field(..., description="Event payload")
    object: Optional[str] = Field(None, description="Always 'event' for Clerk")
    timestamp: Optional[int] = Field(None, description="Event time in epoch milliseconds")


class ClerkUserData(BaseModel):
    """The data object of user.created and user.updated events."""

    model_config = ConfigDict(extra="ignore")

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[int] = None  # epoch milliseconds
    updated_at: Optional[int] = None  # epoch milliseconds


class ClerkDeletedObject(BaseModel):
    """The data object of user.deleted events."""

    model_config = ConfigDict(extra="ignore")

    id: str
    deleted: bool = True
    object: Optional[str] = None


class WebhookResponse(BaseModel):
    """Body returned to the sender when a delivery was accepted."""

    success: bool = True
    action: Optional[ReconcileAction] = None
    profile: Optional[Profile] = None
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Body returned to the sender when a delivery failed."""

    error: str
    code: Optional[str] = None
    detail: Optional[str] = None


class WebhookResult(BaseModel):
    """Transport-level response for one delivery."""

    status_code: int = Field(..., description="HTTP status code")
    body: dict[str, Any] = Field(..., description="JSON body")
