"""
Authentication module interface.

The gatekeeper, the callback resolver and the auth routes depend on
IIdentityProvider, not on the Supabase-backed implementation. This enables
testing with fakes that stage cookies through the real cookie bridge.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser


@runtime_checkable
class IIdentityProvider(Protocol):
    """
    Interface for the per-request identity provider client.

    An instance is bound to one request's cookie bridge. Every call that
    changes the session stages its cookie writes on that bridge.
    """

    @property
    def client(self) -> Any:
        """Data client authenticated with this request's session (RLS-gated)."""
        ...

    async def get_user(self) -> Optional[AuthenticatedUser]:
        """
        Refresh the session found in the cookies and return its user.

        Returns:
            The authenticated user, or None when there is no usable session.
            A failed refresh is reported as None, never raised.
        """
        ...

    async def verify_otp(self, token_hash: str, flow_type: str) -> AuthenticatedUser:
        """
        Verify a one-time token hash from an email link.

        Raises:
            InvalidOrExpiredLinkError: If the provider rejects the token
        """
        ...

    async def exchange_code(self, code: str) -> AuthenticatedUser:
        """
        Exchange a PKCE auth code for a session.

        Raises:
            ExchangeFailedError: If the exchange fails or yields no user
        """
        ...

    async def sign_in_with_password(self, email: str, password: str) -> AuthenticatedUser:
        """
        Start a session with email and password.

        Raises:
            InvalidCredentialsError: If the credentials are rejected
            IdentityProviderUnavailableError: If the provider cannot be reached
        """
        ...

    async def sign_out(self) -> None:
        """End the session and expire its cookies."""
        ...

    async def update_password(self, password: str) -> None:
        """
        Set a new password for the signed-in user.

        Raises:
            MissingSessionError: If there is no session
            PasswordUpdateError: If the provider refuses the password
            IdentityProviderUnavailableError: If the provider cannot be reached
        """
        ...
