"""
Team API endpoints.

- POST /api/team/invite  invite an agency team member (admins only)
"""

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_team_service
from api.middleware.auth import get_current_user
from shared.exceptions import ExternalServiceError
from shared.models import AuthenticatedUser

from .exceptions import AdminRequiredError, InviteFailedError
from .interfaces import ITeamService
from .models import InviteMemberRequest, InviteMemberResponse

router = APIRouter()


@router.post("/invite", response_model=InviteMemberResponse, status_code=201)
async def invite_member(
    request: InviteMemberRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITeamService = Depends(get_team_service),
) -> InviteMemberResponse:
    """
    Invite a team member by email.

    The new account is promoted to admin as soon as the invite is sent.
    """
    try:
        return await service.invite_member(user, request)
    except AdminRequiredError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    except InviteFailedError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except ExternalServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
