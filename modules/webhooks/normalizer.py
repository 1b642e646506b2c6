"""
Event normalization.

Maps verified Clerk events onto the canonical profile commands. All
field-presence handling for provider payloads lives here, so the
reconciler only ever sees complete commands.
"""

import re
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import BaseModel, ValidationError

from modules.profiles.commands import (
    CreateProfile,
    DeactivateProfile,
    ProfileCommand,
    Unhandled,
    UpdateProfile,
)

from .exceptions import MalformedEventError
from .models import ClerkDeletedObject, ClerkUserData, WebhookEvent

# Mirrors the username check constraint on the profiles table
USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_-]{3,30}")

USER_CREATED = "user.created"
USER_UPDATED = "user.updated"
USER_DELETED = "user.deleted"


def derive_full_name(external_id: str, first_name: Optional[str], last_name: Optional[str]) -> str:
    """
    Join the non-empty name parts with a single space.

    Parts are used as sent, padding included. Falls back to the external
    ID when neither part is a non-empty string.
    """
    parts = [part for part in (first_name, last_name) if part]
    return " ".join(parts) or external_id


def sanitize_username(candidate: Optional[str]) -> Optional[str]:
    """Return the username if the profiles table would accept it, else None."""
    if candidate and USERNAME_PATTERN.fullmatch(candidate):
        return candidate
    return None


def from_epoch_millis(value: Optional[int], default: datetime) -> datetime:
    """Convert an epoch-milliseconds timestamp to an aware UTC datetime."""
    if value is None:
        return default
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def _parse_data(event: WebhookEvent, model: type[BaseModel]) -> BaseModel:
    try:
        return model.model_validate(event.data)
    except ValidationError as e:
        raise MalformedEventError(
            f"Invalid {event.type} payload: {e.error_count()} error(s)",
            event_type=event.type,
        )


def _to_create(event: WebhookEvent, now: datetime) -> CreateProfile:
    user = _parse_data(event, ClerkUserData)
    return CreateProfile(
        external_id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        full_name=derive_full_name(user.id, user.first_name, user.last_name),
        username=sanitize_username(user.username),
        avatar_url=user.image_url or None,
        created_at=from_epoch_millis(user.created_at, now),
        updated_at=from_epoch_millis(user.updated_at, now),
    )


def _to_update(event: WebhookEvent, now: datetime) -> UpdateProfile:
    user = _parse_data(event, ClerkUserData)
    return UpdateProfile(
        external_id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        full_name=derive_full_name(user.id, user.first_name, user.last_name),
        username=sanitize_username(user.username),
        avatar_url=user.image_url or None,
        updated_at=from_epoch_millis(user.updated_at, now),
    )


def _to_deactivate(event: WebhookEvent, now: datetime) -> DeactivateProfile:
    deleted = _parse_data(event, ClerkDeletedObject)
    return DeactivateProfile(
        external_id=deleted.id,
        deleted_at=from_epoch_millis(event.timestamp, now),
    )


_NORMALIZERS: dict[str, Callable[[WebhookEvent, datetime], ProfileCommand]] = {
    USER_CREATED: _to_create,
    USER_UPDATED: _to_update,
    USER_DELETED: _to_deactivate,
}


def normalize_event(event: WebhookEvent, now: Optional[datetime] = None) -> ProfileCommand:
    """
    Map a verified event onto a canonical command.

    Args:
        event: Verified webhook envelope
        now: Fallback for timestamps the payload omits, defaults to UTC now

    Returns:
        CreateProfile, UpdateProfile, DeactivateProfile, or Unhandled for
        event types this service does not act on

    Raises:
        MalformedEventError: If a handled event lacks a usable user ID
    """
    normalizer = _NORMALIZERS.get(event.type)
    if normalizer is None:
        return Unhandled(event_type=event.type, raw_payload=event.model_dump())
    return normalizer(event, now or datetime.now(timezone.utc))
