"""
Team service implementation.
"""

import logging

from shared.config import Settings
from shared.models import AuthenticatedUser
from modules.auth.repository import ProfileRepository

from .exceptions import AdminRequiredError
from .interfaces import ITeamService
from .models import InviteMemberRequest, InviteMemberResponse
from .repository import TeamRepository

logger = logging.getLogger(__name__)


class TeamService(ITeamService):
    """
    Team management for one caller.

    ``profiles`` runs as the caller, so the admin check reads the role the
    caller can actually see on their own profile row. ``team`` runs with the
    service role.
    """

    def __init__(self, profiles: ProfileRepository, team: TeamRepository, settings: Settings):
        self._profiles = profiles
        self._team = team
        self._settings = settings

    def invite_redirect_url(self) -> str:
        """Absolute callback URL put in invite emails."""
        return self._settings.site_url.rstrip("/") + self._settings.callback_prefix

    def require_admin(self, caller: AuthenticatedUser) -> None:
        profile = self._profiles.get_by_id(caller.id)
        if profile is None or profile.role != "admin":
            raise AdminRequiredError(caller.id, profile.role if profile else "none")

    async def invite_member(
        self,
        caller: AuthenticatedUser,
        request: InviteMemberRequest,
    ) -> InviteMemberResponse:
        self.require_admin(caller)

        user_id = self._team.invite_user(request.email, request.full_name, self.invite_redirect_url())
        self._team.promote_to_admin(user_id, request.full_name)

        logger.info("User %s invited %s as admin", caller.id, user_id)
        return InviteMemberResponse(user_id=user_id, email=request.email, full_name=request.full_name)
