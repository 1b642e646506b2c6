"""
Role API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_role_resolver
from api.middleware.auth import require_admin
from shared.models import AuthenticatedUser

from .exceptions import RoleStoreError
from .interfaces import IRoleResolver
from .models import RoleListResponse

router = APIRouter()


@router.get("", response_model=RoleListResponse)
async def list_roles(
    admin: AuthenticatedUser = Depends(require_admin),
    roles: IRoleResolver = Depends(get_role_resolver),
) -> RoleListResponse:
    """
    List active roles, lowest permission level first.
    """
    try:
        return RoleListResponse(roles=await roles.list_roles())
    except RoleStoreError as e:
        raise HTTPException(status_code=502, detail=e.message)
