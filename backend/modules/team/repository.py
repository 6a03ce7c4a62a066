"""
Team repository.

Runs on the service-role client: sending invites needs the auth admin API,
and promoting a fresh profile bypasses row-level security.
"""

import logging

import httpx
from supabase import AuthError, PostgrestAPIError

from shared.exceptions import ExternalServiceError
from shared.repository import BaseRepository
from modules.auth.models import UserProfile

from .exceptions import InviteFailedError

logger = logging.getLogger(__name__)


class TeamRepository(BaseRepository[UserProfile]):
    """Invites and role changes for team members."""

    def invite_user(self, email: str, full_name: str, redirect_to: str) -> str:
        """
        Send an invite email.

        Returns:
            ID of the invited user
        """
        try:
            response = self._db.auth.admin.invite_user_by_email(
                email,
                {"data": {"full_name": full_name}, "redirect_to": redirect_to},
            )
        except AuthError as e:
            raise InviteFailedError(email, e.message) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError("Could not reach the identity provider", service="supabase_auth") from e

        user = getattr(response, "user", None)
        if user is None:
            raise InviteFailedError(email, "Invite returned no user")
        return user.id

    def promote_to_admin(self, user_id: str, full_name: str) -> None:
        # The signup trigger created the profile as a client
        try:
            self._db.table("profiles").update(
                {"full_name": full_name, "role": "admin"}
            ).eq("id", user_id).execute()
        except (PostgrestAPIError, httpx.HTTPError) as e:
            logger.error("Failed to promote invited user %s: %s", user_id, e)
            raise ExternalServiceError("Could not update the invited profile", service="supabase_db") from e
