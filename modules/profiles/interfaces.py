"""
Profiles module interface.

The webhooks module and the HTTP layer depend on IProfileService,
not the concrete implementation.
"""

from typing import Optional, Protocol, runtime_checkable

from .commands import ProfileCommand
from .models import Profile, ProfileListResponse, ReconcileResult


@runtime_checkable
class IProfileService(Protocol):
    """
    Interface for profile reconciliation and lookups.
    """

    async def apply(self, command: ProfileCommand) -> ReconcileResult:
        """
        Apply a canonical identity command to the profile store.

        Re-applying a command that already took effect is a success,
        never a duplicate row.

        Args:
            command: Normalized identity command

        Returns:
            ReconcileResult describing the transition taken

        Raises:
            DefaultRoleNotFoundError: If a profile must be created but no
                default role is configured
            ProfileStoreError: If the store fails or rejects the write
        """
        ...

    async def get_profile(self, user_id: str) -> Profile:
        """
        Get the profile for an identity-provider user ID.

        Raises:
            ProfileNotFoundError: If no profile exists
        """
        ...

    async def find_profile(self, user_id: str) -> Optional[Profile]:
        """
        Get the profile for a user ID, or None if it doesn't exist.
        """
        ...

    async def list_profiles(
        self,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        include_inactive: bool = False,
    ) -> ProfileListResponse:
        """
        List profiles with pagination and optional name search.
        """
        ...
