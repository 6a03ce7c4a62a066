"""
Team module exceptions.
"""

from shared.exceptions import AuthorizationError, ValidationError


class AdminRequiredError(AuthorizationError):
    """Raised when a non-admin calls a team management operation."""

    def __init__(self, user_id: str, role: str = "client"):
        super().__init__(
            "Unauthorised: admins only.",
            code="ADMIN_REQUIRED",
            details={"user_id": user_id, "role": role},
        )


class InviteFailedError(ValidationError):
    """Raised when the identity provider refuses an invite (e.g. email already registered)."""

    def __init__(self, email: str, reason: str):
        super().__init__(
            reason,
            code="INVITE_FAILED",
            details={"email": email},
        )
