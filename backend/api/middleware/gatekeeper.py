"""
Session gatekeeper middleware.

Runs before every request except static assets and the auth callback:

1. Builds a per-request identity provider over the request's cookies and
   refreshes the session. No cookie access may happen in between.
2. Decides routing:
   - anonymous caller on a protected path that is not publicly reachable
     → redirect to login with ``redirectedFrom``;
   - signed-in caller on the exact login path → redirect to the protected root;
   - otherwise pass through.
3. Stamps any refreshed session cookies onto whatever response goes out.

The callback path is skipped entirely: refreshing the session while the
callback is exchanging credentials corrupts the exchange.
"""

import logging
import re
from typing import Optional
from urllib.parse import urlencode

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from api.dependencies import create_identity_provider
from modules.auth.cookies import SessionCookieBridge
from modules.auth.redirects import absolute_url, build_redirect
from shared.config import Settings, get_settings

logger = logging.getLogger(__name__)

STATIC_ASSET_PATTERN = re.compile(
    r"^/(?:_next/static|_next/image|static)(?:/|$)"
    r"|^/favicon\.ico$"
    r"|\.(?:svg|png|jpe?g|gif|webp|ico|woff2?)$",
    re.IGNORECASE,
)


def is_static_asset(path: str) -> bool:
    return bool(STATIC_ASSET_PATTERN.search(path))


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def is_callback_path(path: str, settings: Settings) -> bool:
    return _under(path, settings.callback_prefix)


def is_protected_path(path: str, settings: Settings) -> bool:
    return _under(path, settings.protected_prefix)


def decide_route(path: str, authenticated: bool, settings: Settings) -> Optional[str]:
    """
    Routing decision for one request.

    Returns:
        Same-origin redirect target (path and query), or None to pass through
    """
    if (
        not authenticated
        and is_protected_path(path, settings)
        and path not in settings.public_protected_paths
    ):
        return f"{settings.login_path}?{urlencode({'redirectedFrom': path})}"

    if authenticated and path == settings.login_path:
        return settings.protected_prefix

    return None


class SessionGatekeeperMiddleware(BaseHTTPMiddleware):
    """Refreshes the session and guards the protected area."""

    def __init__(self, app: ASGIApp, settings: Optional[Settings] = None) -> None:
        super().__init__(app)
        self._settings = settings

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        settings = self._settings or get_settings()
        path = request.url.path

        if is_static_asset(path) or is_callback_path(path, settings):
            return await call_next(request)

        bridge = SessionCookieBridge(request)
        provider = create_identity_provider(bridge)
        user = await provider.get_user()

        request.state.session_bridge = bridge
        request.state.identity_provider = provider
        request.state.user = user

        target = decide_route(path, user is not None, settings)
        if target is not None:
            logger.debug("Gatekeeper redirect %s -> %s", path, target)
            return build_redirect(absolute_url(request, target), bridge.pending)

        response = await call_next(request)
        return bridge.pending.apply(response, keep_existing=True)
