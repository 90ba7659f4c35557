"""
User-related endpoints.
"""

from fastapi import APIRouter, Depends

from shared.models import AuthenticatedUser
from ..middleware.auth import get_current_user
from ..models.user import UserProfileResponse

router = APIRouter()


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
) -> UserProfileResponse:
    """
    Get the current user's profile from the token claims.

    Requires authentication.
    """
    return UserProfileResponse(
        id=user.id,
        email=user.email,
        email_verified=user.email_verified,
        role=user.role,
    )
