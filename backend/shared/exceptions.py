"""
Error categories shared by every module.

Module exceptions subclass one of these and set a stable ``code``. Routes map
the categories onto HTTP statuses; the auth callback maps its own onto a
login-page error code instead.
"""

from typing import Optional, Any


class PortalError(Exception):
    """
    Base exception for the portal.

    ``code`` defaults to the class name; ``details`` is free-form context for
    logs and API error bodies.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(PortalError):
    """A row does not exist or row-level security hides it."""

    pass


class ValidationError(PortalError):
    """Input validation failed."""

    pass


class AuthenticationError(PortalError):
    """No usable session, or the provider rejected the credentials."""

    pass


class AuthorizationError(PortalError):
    """Signed in, but not allowed (e.g. a client acting on an admin-only resource)."""

    pass


class ExternalServiceError(PortalError):
    """The identity provider or database could not be reached."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
