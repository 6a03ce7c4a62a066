"""
User-related endpoints.

Provides endpoints for the signed-in user's identity.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.models import AuthenticatedUser
from ..middleware.auth import get_current_user

router = APIRouter()


class UserProfileResponse(BaseModel):
    """User identity response model."""

    id: str
    email: Optional[str]
    role: str
    created_at: Optional[datetime]
    last_sign_in_at: Optional[datetime]
    invited: bool


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
) -> UserProfileResponse:
    """
    Get the current user's identity.

    Requires a session.
    """
    return UserProfileResponse(
        id=user.id,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
        last_sign_in_at=user.last_sign_in_at,
        invited=user.invited_at is not None,
    )
