"""
Roles module.

Reads the roles master table and resolves the default role that
newly observed identities are provisioned with.

Public API:
- IRoleResolver: Interface for role lookups
- Role: Role record
- Role exceptions: DefaultRoleNotFoundError, RoleStoreError
"""

from .interfaces import IRoleResolver
from .models import Role, RoleListResponse
from .exceptions import DefaultRoleNotFoundError, RoleStoreError

__all__ = [
    # Interface
    "IRoleResolver",
    # Models
    "Role",
    "RoleListResponse",
    # Exceptions
    "DefaultRoleNotFoundError",
    "RoleStoreError",
]
