"""
Identity provider implementation backed by Supabase Auth.

One instance is built per request around that request's cookie bridge.
The supabase-py client is synchronous, so each call runs in the threadpool;
calls are awaited one at a time and nothing touches the cookies between
building the client and the first auth call.
"""

import logging
from typing import Any, Optional

import httpx
from starlette.concurrency import run_in_threadpool
from supabase import AuthError, AuthSessionMissingError

from shared.config import Settings, get_settings
from shared.database import get_supabase_session_client
from shared.models import AuthenticatedUser

from .cookies import CookieSessionStorage, SessionCookieBridge
from .exceptions import (
    ExchangeFailedError,
    IdentityProviderUnavailableError,
    InvalidCredentialsError,
    InvalidOrExpiredLinkError,
    MissingSessionError,
    PasswordUpdateError,
)
from .interfaces import IIdentityProvider
from .models import CookieOptions

logger = logging.getLogger(__name__)


def session_cookie_options(settings: Settings) -> CookieOptions:
    """Cookie attributes for session cookies."""
    return CookieOptions(
        path="/",
        max_age=settings.session_cookie_max_age,
        secure=settings.session_cookie_secure,
        httponly=False,
        samesite=settings.session_cookie_samesite,
    )


def to_authenticated_user(user: Any) -> AuthenticatedUser:
    """Map a Supabase ``User`` onto the portal's read-only user view."""
    app_metadata = getattr(user, "app_metadata", None) or {}
    return AuthenticatedUser(
        id=user.id,
        email=user.email,
        created_at=user.created_at,
        last_sign_in_at=user.last_sign_in_at,
        invited_at=getattr(user, "invited_at", None),
        role=app_metadata.get("role", "client"),
    )


class SupabaseIdentityProvider(IIdentityProvider):
    """
    Implementation of the identity provider on top of supabase-py.

    The session is kept in cookies through CookieSessionStorage, so every
    session change the client makes lands on the bridge's pending set.
    """

    def __init__(self, bridge: SessionCookieBridge, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()
        self._storage = CookieSessionStorage(
            bridge,
            cookie_name=self._settings.auth_cookie_name,
            options=session_cookie_options(self._settings),
            chunk_size=self._settings.session_cookie_chunk_size,
        )
        self._client = get_supabase_session_client(self._storage)

    @property
    def client(self) -> Any:
        return self._client

    async def get_user(self) -> Optional[AuthenticatedUser]:
        """
        Refresh the session and return its user.

        Reading the session refreshes an expiring access token and rewrites
        the session cookie. Any provider error means "anonymous".
        """
        try:
            response = await run_in_threadpool(self._client.auth.get_user)
        except (AuthError, httpx.HTTPError) as e:
            logger.warning("Session refresh failed: %s", e)
            return None

        if response is None or response.user is None:
            return None
        return to_authenticated_user(response.user)

    async def verify_otp(self, token_hash: str, flow_type: str) -> AuthenticatedUser:
        try:
            response = await run_in_threadpool(
                self._client.auth.verify_otp,
                {"token_hash": token_hash, "type": flow_type},
            )
        except (AuthError, httpx.HTTPError) as e:
            logger.warning("OTP verification failed for type=%s: %s", flow_type, e)
            raise InvalidOrExpiredLinkError() from e

        if response.user is None:
            raise InvalidOrExpiredLinkError()
        return to_authenticated_user(response.user)

    async def exchange_code(self, code: str) -> AuthenticatedUser:
        try:
            response = await run_in_threadpool(
                self._client.auth.exchange_code_for_session,
                {"auth_code": code},
            )
        except (AuthError, httpx.HTTPError) as e:
            logger.warning("Code exchange failed: %s", e)
            raise ExchangeFailedError() from e

        if response.user is None:
            raise ExchangeFailedError("Code exchange returned no user")
        return to_authenticated_user(response.user)

    async def sign_in_with_password(self, email: str, password: str) -> AuthenticatedUser:
        try:
            response = await run_in_threadpool(
                self._client.auth.sign_in_with_password,
                {"email": email, "password": password},
            )
        except AuthError as e:
            # Generic message: never reveal whether the email exists
            logger.info("Password sign-in rejected: %s", e)
            raise InvalidCredentialsError() from e
        except httpx.HTTPError as e:
            logger.warning("Password sign-in could not reach the provider: %s", e)
            raise IdentityProviderUnavailableError() from e

        if response.user is None:
            raise InvalidCredentialsError()
        return to_authenticated_user(response.user)

    async def sign_out(self) -> None:
        try:
            await run_in_threadpool(self._client.auth.sign_out)
        except (AuthError, httpx.HTTPError) as e:
            logger.warning("Provider sign-out failed, clearing cookies anyway: %s", e)
        self._storage.clear()

    async def update_password(self, password: str) -> None:
        try:
            await run_in_threadpool(self._client.auth.update_user, {"password": password})
        except AuthSessionMissingError as e:
            raise MissingSessionError() from e
        except AuthError as e:
            raise PasswordUpdateError(str(e)) from e
        except httpx.HTTPError as e:
            logger.warning("Password update could not reach the provider: %s", e)
            raise IdentityProviderUnavailableError() from e
