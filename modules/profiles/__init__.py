"""
Profiles module.

Owns the local profiles table: reconciles identity commands into it and
serves read-only lookups for the admin API.

Public API:
- IProfileService: Interface for reconciliation and lookups
- Commands: CreateProfile, UpdateProfile, DeactivateProfile, Unhandled
- Models: Profile, ReconcileAction, ReconcileResult
- Profile exceptions: ProfileNotFoundError, ProfileStoreError
"""

from .interfaces import IProfileService
from .commands import (
    CreateProfile,
    UpdateProfile,
    DeactivateProfile,
    Unhandled,
    ProfileCommand,
)
from .models import (
    Profile,
    ProfileListItem,
    ProfileListResponse,
    ReconcileAction,
    ReconcileResult,
)
from .exceptions import ProfileNotFoundError, ProfileStoreError

__all__ = [
    # Interface
    "IProfileService",
    # Commands
    "CreateProfile",
    "UpdateProfile",
    "DeactivateProfile",
    "Unhandled",
    "ProfileCommand",
    # Models
    "Profile",
    "ProfileListItem",
    "ProfileListResponse",
    "ReconcileAction",
    "ReconcileResult",
    # Exceptions
    "ProfileNotFoundError",
    "ProfileStoreError",
]
