"""
Team module interface.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import InviteMemberRequest, InviteMemberResponse


@runtime_checkable
class ITeamService(Protocol):
    """Interface for agency team management."""

    async def invite_member(
        self,
        caller: AuthenticatedUser,
        request: InviteMemberRequest,
    ) -> InviteMemberResponse:
        """
        Send an invite email and make the invited account an admin.

        The invite link points at the auth callback, which sends the new
        member to the password setup page.

        Raises:
            AdminRequiredError: If the caller's profile is not an admin
            InviteFailedError: If the provider refuses the invite
            ExternalServiceError: If the provider or database is unreachable
        """
        ...
