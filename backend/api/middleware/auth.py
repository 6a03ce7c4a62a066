"""
Authentication dependencies.

The session gatekeeper resolves the caller once per request and stores the
result on ``request.state.user``; these dependencies read it from there.
"""

from typing import Optional
from fastapi import Depends, HTTPException, Request, status

from shared.models import AuthenticatedUser


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
        )


async def get_optional_user(request: Request) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally returns the signed-in user.

    Use this for endpoints that work with or without a session.
    """
    return getattr(request.state, "user", None)


async def get_current_user(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> AuthenticatedUser:
    """
    Dependency that requires a session.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if user is None:
        raise AuthError("Authentication required")
    return user

