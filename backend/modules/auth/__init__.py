"""
Authentication module.

Handles the cookie-based session, the auth callback state machine and the
sign-in / sign-out / password-setup endpoints.

Public API:
- IIdentityProvider: Interface for the per-request identity provider
- SessionCookieBridge, PendingCookieSet: Request/response cookie plumbing
- CallbackResolver: Auth callback state machine
- Auth exceptions: InvalidOrExpiredLinkError, ExchangeFailedError, etc.
"""

from .interfaces import IIdentityProvider
from .cookies import CookieSessionStorage, PendingCookieSet, SessionCookieBridge
from .callback import CallbackResolver, is_first_sign_in
from .models import (
    AuthenticatedUser,
    AuthFlow,
    CookieOptions,
    Destination,
    DestinationKind,
    FlowType,
    InboundAuthRequest,
    PendingCookie,
)
from .exceptions import (
    CallbackError,
    NoRecognizableParamsError,
    InvalidOrExpiredLinkError,
    ExchangeFailedError,
    InvalidCredentialsError,
    MissingSessionError,
    PasswordUpdateError,
    IdentityProviderUnavailableError,
)

__all__ = [
    # Interface
    "IIdentityProvider",
    # Cookies
    "CookieSessionStorage",
    "PendingCookieSet",
    "SessionCookieBridge",
    # Callback
    "CallbackResolver",
    "is_first_sign_in",
    # Models
    "AuthenticatedUser",
    "AuthFlow",
    "CookieOptions",
    "Destination",
    "DestinationKind",
    "FlowType",
    "InboundAuthRequest",
    "PendingCookie",
    # Exceptions
    "CallbackError",
    "NoRecognizableParamsError",
    "InvalidOrExpiredLinkError",
    "ExchangeFailedError",
    "InvalidCredentialsError",
    "MissingSessionError",
    "PasswordUpdateError",
    "IdentityProviderUnavailableError",
]
