"""
Role resolution.

Looks up the default role attached to profiles created from webhooks.
"""

import logging
from typing import Optional

from shared.config import Settings
from shared.repository import STORE_ERRORS, describe_store_error

from .exceptions import DefaultRoleNotFoundError, RoleStoreError
from .interfaces import IRoleResolver
from .models import Role
from .repository import RoleRepository

logger = logging.getLogger(__name__)


class RoleResolver(IRoleResolver):
    """
    Resolves roles against the roles table.

    Fails closed: without exactly one usable default role no profile
    can be provisioned.
    """

    def __init__(self, repository: RoleRepository, default_code: str = "user"):
        self._repository = repository
        self._default_code = default_code

    @classmethod
    def from_settings(cls, repository: RoleRepository, settings: Settings) -> "RoleResolver":
        """Build a resolver using the configured default role code."""
        return cls(repository, default_code=settings.default_role_code)

    @property
    def default_code(self) -> str:
        return self._default_code

    async def resolve_default_role(self) -> Role:
        """Get the active default role, lowest ID first when ambiguous."""
        try:
            roles = self._repository.list_active_by_code(self._default_code)
        except STORE_ERRORS as e:
            raise RoleStoreError("Failed to look up default role", db_error=describe_store_error(e))

        if not roles:
            logger.error(
                f"No active role with code '{self._default_code}'; "
                "profiles cannot be created until one is seeded"
            )
            raise DefaultRoleNotFoundError(self._default_code)

        if len(roles) > 1:
            logger.warning(
                f"{len(roles)} active roles share code '{self._default_code}', "
                f"using role {roles[0].id}"
            )

        return roles[0]

    async def get_role(self, role_id: int) -> Optional[Role]:
        """Get a role by ID, active or not."""
        try:
            return self._repository.get_by_id(role_id)
        except STORE_ERRORS as e:
            raise RoleStoreError("Failed to look up role", db_error=describe_store_error(e))

    async def list_roles(self) -> list[Role]:
        """List active roles."""
        try:
            return self._repository.list_active()
        except STORE_ERRORS as e:
            raise RoleStoreError("Failed to list roles", db_error=describe_store_error(e))
