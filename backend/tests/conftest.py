"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
The identity provider is replaced with FakeIdentityProvider, which writes
session cookies through the real SessionCookieBridge so cookie propagation
is exercised end to end without a Supabase project.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from unittest.mock import MagicMock

import pytest
from starlette.requests import Request

from api.dependencies import get_container, reset_container
from modules.auth.cookies import SessionCookieBridge
from modules.auth.exceptions import (
    ExchangeFailedError,
    InvalidCredentialsError,
    InvalidOrExpiredLinkError,
)
from modules.auth.models import CookieOptions, PendingCookie
from shared.config import get_settings
from shared.database import reset_client_cache
from shared.models import AuthenticatedUser


TEST_COOKIE_NAME = "sb-test-auth-token"
TEST_VERIFIER_COOKIE_NAME = f"{TEST_COOKIE_NAME}-code-verifier"


def make_user(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    created_ago: timedelta = timedelta(days=30),
    signed_in_after_creation: Optional[timedelta] = None,
    invited: bool = False,
    role: str = "client",
) -> AuthenticatedUser:
    """
    Create an AuthenticatedUser for testing.

    By default the account is a month old and signed in just now, so the
    first-sign-in heuristic does not fire.
    """
    now = datetime.now(timezone.utc)
    created_at = now - created_ago
    last_sign_in_at = now if signed_in_after_creation is None else created_at + signed_in_after_creation
    return AuthenticatedUser(
        id=user_id,
        email=email,
        created_at=created_at,
        last_sign_in_at=last_sign_in_at,
        invited_at=created_at if invited else None,
        role=role,
    )


def make_request(cookie_header: Optional[str] = None, path: str = "/") -> Request:
    """Create a bare Starlette request carrying ``cookie_header``."""
    headers = []
    if cookie_header:
        headers.append((b"cookie", cookie_header.encode("latin-1")))
    return Request({
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "query_string": b"",
        "headers": headers,
    })


class FakeAuthBackend:
    """
    Scripted identity provider state shared by every request of one test.

    Calling the backend with a bridge builds a FakeIdentityProvider, so an
    instance can be installed directly as the container's provider factory.
    """

    def __init__(self) -> None:
        self.current_user: Optional[AuthenticatedUser] = None
        self.refresh_session = False
        self.otp_valid = True
        self.code_valid = True
        self.expire_verifier_on_failure = False
        self.callback_user = make_user()
        self.password = "correct-password"
        self.password_error: Optional[Exception] = None
        self.sign_in_error: Optional[Exception] = None
        self.calls: list[tuple] = []
        self.client = MagicMock()

    def __call__(self, bridge: SessionCookieBridge) -> "FakeIdentityProvider":
        return FakeIdentityProvider(self, bridge)

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


class FakeIdentityProvider:
    """In-memory identity provider bound to one request's cookie bridge."""

    def __init__(self, backend: FakeAuthBackend, bridge: SessionCookieBridge) -> None:
        self._backend = backend
        self._bridge = bridge

    @property
    def client(self):
        return self._backend.client

    async def get_user(self) -> Optional[AuthenticatedUser]:
        self._backend.calls.append(("get_user",))
        user = self._backend.current_user
        if user is not None and self._backend.refresh_session:
            self._write_session("refreshed-session")
        return user

    async def verify_otp(self, token_hash: str, flow_type: str) -> AuthenticatedUser:
        self._backend.calls.append(("verify_otp", token_hash, flow_type))
        if not self._backend.otp_valid:
            raise InvalidOrExpiredLinkError()
        self._write_session("otp-session")
        return self._backend.callback_user

    async def exchange_code(self, code: str) -> AuthenticatedUser:
        self._backend.calls.append(("exchange_code", code))
        if not self._backend.code_valid:
            if self._backend.expire_verifier_on_failure:
                self._bridge.write_all([
                    PendingCookie(name=TEST_VERIFIER_COOKIE_NAME, value="", options=CookieOptions(max_age=0)),
                ])
            raise ExchangeFailedError()
        self._write_session("exchanged-session", drop_verifier=True)
        return self._backend.callback_user

    async def sign_in_with_password(self, email: str, password: str) -> AuthenticatedUser:
        self._backend.calls.append(("sign_in_with_password", email))
        if self._backend.sign_in_error is not None:
            raise self._backend.sign_in_error
        if password != self._backend.password:
            raise InvalidCredentialsError()
        self._write_session("password-session")
        return self._backend.callback_user

    async def sign_out(self) -> None:
        self._backend.calls.append(("sign_out",))
        self._bridge.write_all([
            PendingCookie(name=TEST_COOKIE_NAME, value="", options=CookieOptions(max_age=0)),
        ])

    async def update_password(self, password: str) -> None:
        self._backend.calls.append(("update_password",))
        if self._backend.password_error is not None:
            raise self._backend.password_error

    def _write_session(self, value: str, drop_verifier: bool = False) -> None:
        cookies = [PendingCookie(name=TEST_COOKIE_NAME, value=value, options=CookieOptions(max_age=3600))]
        if drop_verifier:
            cookies.append(
                PendingCookie(name=TEST_VERIFIER_COOKIE_NAME, value="", options=CookieOptions(max_age=0))
            )
        self._bridge.write_all(cookies)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, clients and the service container around each test."""
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()


@pytest.fixture
def auth_backend() -> FakeAuthBackend:
    """Install a fake identity provider for every request in the test."""
    backend = FakeAuthBackend()
    get_container().identity_provider_factory = backend
    return backend


@pytest.fixture
def test_user() -> AuthenticatedUser:
    """Provide a consistent signed-in user."""
    return make_user()


@pytest.fixture
def signed_in(auth_backend: FakeAuthBackend, test_user: AuthenticatedUser) -> FakeAuthBackend:
    """Fake backend with a live session for ``test_user``."""
    auth_backend.current_user = test_user
    return auth_backend
