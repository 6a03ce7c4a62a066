"""
Auth endpoints.

- GET  /auth/callback  provider redirect target (OTP and PKCE flows)
- POST /auth/login     email/password sign-in
- POST /auth/logout    sign-out
- POST /auth/password  password setup after invite or recovery
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse

from api.dependencies import create_identity_provider, get_cookie_bridge, get_identity_provider
from api.middleware.auth import get_current_user
from shared.config import get_settings
from shared.models import AuthenticatedUser

from .callback import CallbackResolver
from .cookies import SessionCookieBridge
from .exceptions import (
    IdentityProviderUnavailableError,
    InvalidCredentialsError,
    MissingSessionError,
    PasswordUpdateError,
)
from .interfaces import IIdentityProvider
from .models import AuthRedirectResponse, InboundAuthRequest, SetPasswordRequest, SignInRequest
from .redirects import absolute_url, build_redirect, safe_next_path
from .repository import ProfileRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/callback", response_class=RedirectResponse)
async def auth_callback(request: Request) -> RedirectResponse:
    """
    Provider redirect target for invite, magic link, recovery and OAuth.

    Always answers with a redirect: to the next page on success, or to the
    login page with ``?error=<code>`` on failure. Cookies staged during the
    exchange are copied onto the redirect in both cases.
    """
    settings = get_settings()
    bridge = SessionCookieBridge(request)
    provider = create_identity_provider(bridge)

    inbound = InboundAuthRequest.from_query(request.query_params)
    destination = await CallbackResolver(provider, settings).resolve(inbound)

    return build_redirect(absolute_url(request, destination.to_path(settings)), bridge.pending)


@router.post("/login", response_model=AuthRedirectResponse)
async def sign_in(
    body: SignInRequest,
    response: Response,
    bridge: SessionCookieBridge = Depends(get_cookie_bridge),
    provider: IIdentityProvider = Depends(get_identity_provider),
) -> AuthRedirectResponse:
    """
    Sign in with email and password.

    Returns where the browser should go next: ``redirect_to`` when it is a
    same-origin path, otherwise the dashboard.
    """
    try:
        await provider.sign_in_with_password(body.email, body.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    except IdentityProviderUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    bridge.pending.apply(response)
    destination = safe_next_path(body.redirect_to) or get_settings().protected_prefix
    return AuthRedirectResponse(redirect_to=destination)


@router.post("/logout", response_model=AuthRedirectResponse)
async def sign_out(
    response: Response,
    bridge: SessionCookieBridge = Depends(get_cookie_bridge),
    provider: IIdentityProvider = Depends(get_identity_provider),
) -> AuthRedirectResponse:
    """Sign out and expire the session cookies."""
    await provider.sign_out()
    bridge.pending.apply(response)
    return AuthRedirectResponse(redirect_to=get_settings().login_path)


@router.post("/password", response_model=AuthRedirectResponse)
async def set_password(
    body: SetPasswordRequest,
    response: Response,
    user: AuthenticatedUser = Depends(get_current_user),
    bridge: SessionCookieBridge = Depends(get_cookie_bridge),
    provider: IIdentityProvider = Depends(get_identity_provider),
) -> AuthRedirectResponse:
    """
    Set the password after following an invite or recovery link.

    Optionally records the user's full name on their profile.
    """
    try:
        await provider.update_password(body.password)
    except MissingSessionError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    except PasswordUpdateError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except IdentityProviderUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    if body.full_name:
        ProfileRepository(provider.client).update_full_name(user.id, body.full_name)

    bridge.pending.apply(response)
    return AuthRedirectResponse(redirect_to=get_settings().protected_prefix)
