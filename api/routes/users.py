"""
User-related endpoints.

Provides the caller's own identity and local profile.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.auth.interfaces import IAuthService
from modules.profiles.models import Profile
from shared.models import AuthenticatedUser
from ..dependencies import get_auth_service
from ..middleware.auth import get_current_user

router = APIRouter()


class UserProfileResponse(BaseModel):
    """User profile response model."""

    id: str
    email: Optional[str] = None
    email_verified: bool
    role: str
    profile: Optional[Profile] = None


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> UserProfileResponse:
    """
    Get the current user's identity and local profile.

    Requires authentication. profile is null until the identity
    provider's user.created webhook has been processed.
    """
    return UserProfileResponse(
        id=user.id,
        email=user.email,
        email_verified=user.email_verified,
        role=user.role,
        profile=await auth.get_user_by_id(user.id),
    )
