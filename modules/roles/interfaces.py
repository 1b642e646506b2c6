"""
Roles module interface.

The profiles module depends on IRoleResolver rather than the concrete
resolver, so reconciler tests can hand in a fake.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import Role


@runtime_checkable
class IRoleResolver(Protocol):
    """Interface for role lookups needed during provisioning."""

    async def resolve_default_role(self) -> Role:
        """
        Get the role newly observed identities are attached to.

        Returns:
            The active role carrying the configured default code

        Raises:
            DefaultRoleNotFoundError: If no such role exists
            RoleStoreError: If the roles table cannot be read
        """
        ...

    async def get_role(self, role_id: int) -> Optional[Role]:
        """
        Get a role by ID, or None if it doesn't exist.
        """
        ...

    async def list_roles(self) -> list[Role]:
        """
        List active roles, lowest permission level first.
        """
        ...
