"""
Profile reconciliation service.

Applies canonical identity commands to the profiles table. Each command
touches at most one row, keyed by user_id; the table's unique constraint
on user_id is what serializes duplicate deliveries.
"""

import logging
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError

from modules.roles.interfaces import IRoleResolver
from shared.repository import STORE_ERRORS, describe_store_error, is_unique_violation

from .commands import (
    CreateProfile,
    DeactivateProfile,
    ProfileCommand,
    Unhandled,
    UpdateProfile,
)
from .exceptions import ProfileNotFoundError, ProfileStoreError
from .interfaces import IProfileService
from .models import (
    Profile,
    ProfileListResponse,
    ReconcileAction,
    ReconcileResult,
)
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


class ProfileService(IProfileService):
    """
    Reconciles identity-provider events into local profiles.

    Transitions, by command and whether a profile exists for its user_id:

        create     absent   -> insert with the default role    (created)
        create     present  -> nothing                         (already_exists)
        update     present  -> set name/username/avatar fields (updated)
        update     newer    -> nothing                         (stale)
        update     absent   -> nothing                         (not_found)
        deactivate present  -> is_active = false               (deactivated)
        deactivate absent   -> nothing                         (not_found)
        unhandled  -        -> nothing                         (ignored)
    """

    def __init__(self, repository: ProfileRepository, roles: IRoleResolver):
        self._repository = repository
        self._roles = roles

    async def apply(self, command: ProfileCommand) -> ReconcileResult:
        """Dispatch a command to its transition."""
        if isinstance(command, CreateProfile):
            return await self._create(command)
        if isinstance(command, UpdateProfile):
            return await self._update(command)
        if isinstance(command, DeactivateProfile):
            return await self._deactivate(command)
        if isinstance(command, Unhandled):
            logger.info(f"Ignoring unhandled event type: {command.event_type}")
            return ReconcileResult(action=ReconcileAction.IGNORED, event_type=command.event_type)
        raise TypeError(f"Unsupported profile command: {type(command).__name__}")

    async def get_profile(self, user_id: str) -> Profile:
        profile = await self.find_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    async def find_profile(self, user_id: str) -> Optional[Profile]:
        try:
            return self._repository.get_by_user_id(user_id)
        except STORE_ERRORS as e:
            raise self._store_error("Failed to read profile", user_id, e)

    async def list_profiles(
        self,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        include_inactive: bool = False,
    ) -> ProfileListResponse:
        try:
            items, total = self._repository.list_profiles(
                page=page,
                page_size=page_size,
                search=search,
                include_inactive=include_inactive,
            )
        except STORE_ERRORS as e:
            raise self._store_error("Failed to list profiles", None, e)

        return ProfileListResponse(
            profiles=items,
            total=total,
            page=page,
            page_size=page_size,
            has_more=(page * page_size) < total,
        )

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    async def _create(self, command: CreateProfile) -> ReconcileResult:
        user_id = command.external_id

        existing = await self.find_profile(user_id)
        if existing is not None:
            logger.info(f"Profile for {user_id} already exists, skipping create")
            return self._already_exists(existing)

        # Only resolved once an insert is actually needed
        role = await self._roles.resolve_default_role()

        data = {
            "user_id": user_id,
            "role_id": role.id,
            "username": command.username,
            "full_name": command.full_name,
            "avatar_url": command.avatar_url,
            "is_active": True,
            "created_at": command.created_at.isoformat(),
            "updated_at": command.updated_at.isoformat(),
        }

        try:
            profile = self._repository.insert_if_absent(data)
        except APIError as e:
            if not is_unique_violation(e):
                raise self._store_error("Failed to create profile", user_id, e)
            # A concurrent delivery may have won the race; anything else
            # (e.g. a username taken by another profile) is a real conflict.
            concurrent = await self.find_profile(user_id)
            if concurrent is None:
                raise self._store_error("Failed to create profile", user_id, e)
            logger.info(f"Duplicate create for {user_id} rejected by store, treating as applied")
            return self._already_exists(concurrent)
        except httpx.HTTPError as e:
            raise self._store_error("Failed to create profile", user_id, e)

        if profile is None:
            concurrent = await self.find_profile(user_id)
            if concurrent is None:
                raise ProfileStoreError(
                    "Profile insert was skipped but no existing profile was found",
                    user_id=user_id,
                )
            logger.info(f"Create for {user_id} raced another delivery, treating as applied")
            return self._already_exists(concurrent)

        logger.info(f"Created profile for {user_id} with role {role.id}")
        return ReconcileResult(action=ReconcileAction.CREATED, user_id=user_id, profile=profile)

    async def _update(self, command: UpdateProfile) -> ReconcileResult:
        data = {
            "username": command.username,
            "full_name": command.full_name,
            "avatar_url": command.avatar_url,
            "updated_at": command.updated_at.isoformat(),
        }
        updated_at = data["updated_at"]
        profile = self._write(command.external_id, data, "Failed to update profile", not_newer_than=updated_at)
        if profile is None:
            current = await self.find_profile(command.external_id)
            if current is None:
                return self._not_found(command.external_id, "update")
            logger.info(
                f"Skipping stale update for {command.external_id}: "
                f"stored {current.updated_at.isoformat()} is newer than {updated_at}"
            )
            return ReconcileResult(
                action=ReconcileAction.STALE,
                user_id=command.external_id,
                profile=current,
            )

        logger.info(f"Updated profile for {command.external_id}")
        return ReconcileResult(
            action=ReconcileAction.UPDATED,
            user_id=command.external_id,
            profile=profile,
        )

    async def _deactivate(self, command: DeactivateProfile) -> ReconcileResult:
        data = {
            "is_active": False,
            "updated_at": command.deleted_at.isoformat(),
        }
        profile = self._write(command.external_id, data, "Failed to deactivate profile")
        if profile is None:
            return self._not_found(command.external_id, "deactivate")

        logger.info(f"Deactivated profile for {command.external_id}")
        return ReconcileResult(
            action=ReconcileAction.DEACTIVATED,
            user_id=command.external_id,
            profile=profile,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _write(
        self,
        user_id: str,
        data: dict[str, Any],
        failure: str,
        not_newer_than: Optional[str] = None,
    ) -> Optional[Profile]:
        try:
            return self._repository.update_by_user_id(user_id, data, not_newer_than=not_newer_than)
        except STORE_ERRORS as e:
            raise self._store_error(failure, user_id, e)

    def _already_exists(self, profile: Profile) -> ReconcileResult:
        return ReconcileResult(
            action=ReconcileAction.ALREADY_EXISTS,
            user_id=profile.user_id,
            profile=profile,
        )

    def _not_found(self, user_id: str, operation: str) -> ReconcileResult:
        logger.warning(f"Cannot {operation} profile: none exists for {user_id}")
        return ReconcileResult(action=ReconcileAction.NOT_FOUND, user_id=user_id)

    def _store_error(self, message: str, user_id: Optional[str], error: Exception) -> ProfileStoreError:
        return ProfileStoreError(
            message,
            user_id=user_id,
            db_code=error.code if isinstance(error, APIError) else None,
            db_error=describe_store_error(error),
        )
