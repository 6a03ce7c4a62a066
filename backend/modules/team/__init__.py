"""
Team module.

Agency-side team management. Invites go out through the provider's admin
API and land on the auth callback.

Public API:
- ITeamService: Interface for team operations
- Invite models and exceptions
"""

from .interfaces import ITeamService
from .models import InviteMemberRequest, InviteMemberResponse
from .exceptions import AdminRequiredError, InviteFailedError

__all__ = [
    # Interface
    "ITeamService",
    # Models
    "InviteMemberRequest",
    "InviteMemberResponse",
    # Exceptions
    "AdminRequiredError",
    "InviteFailedError",
]
