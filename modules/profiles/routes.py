"""
Profile API endpoints.

Read-only admin views over the profiles table. Writes only ever come
from the identity webhooks.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_profile_service
from api.middleware.auth import require_admin
from shared.exceptions import ExternalServiceError
from shared.models import AuthenticatedUser

from .exceptions import ProfileNotFoundError
from .interfaces import IProfileService
from .models import Profile, ProfileListResponse

router = APIRouter()


@router.get("", response_model=ProfileListResponse)
async def list_profiles(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(default=20, ge=1, le=100, description="Items per page"),
    search: Optional[str] = Query(default=None, min_length=1, description="Name substring"),
    include_inactive: bool = Query(default=False, description="Include deactivated profiles"),
    admin: AuthenticatedUser = Depends(require_admin),
    service: IProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """
    List profiles, most recently updated first.
    """
    try:
        return await service.list_profiles(page, page_size, search, include_inactive)
    except ExternalServiceError as e:
        raise HTTPException(status_code=502, detail=e.message)


@router.get("/{user_id}", response_model=Profile)
async def get_profile(
    user_id: str,
    admin: AuthenticatedUser = Depends(require_admin),
    service: IProfileService = Depends(get_profile_service),
) -> Profile:
    """
    Get the profile for an identity-provider user ID, active or not.
    """
    try:
        return await service.get_profile(user_id)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")
    except ExternalServiceError as e:
        raise HTTPException(status_code=502, detail=e.message)
