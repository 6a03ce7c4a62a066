"""
Redirect helpers shared by the gatekeeper, the callback and the auth routes.
"""

from typing import Optional

from starlette.requests import Request
from starlette.responses import RedirectResponse

from .cookies import PendingCookieSet


def safe_next_path(value: Optional[str]) -> Optional[str]:
    """
    Return ``value`` if it is a same-origin relative path, else None.

    ``//host`` and ``/\\host`` are protocol-relative to browsers and are
    rejected along with absolute URLs.
    """
    if not value or not value.startswith("/"):
        return None
    if value.startswith("//") or value.startswith("/\\"):
        return None
    if any(ord(ch) < 0x20 for ch in value):
        return None
    return value


def absolute_url(request: Request, path: str) -> str:
    """Join a same-origin path (with optional query) onto the request's base URL."""
    return str(request.base_url).rstrip("/") + path


def build_redirect(
    url: str,
    pending: PendingCookieSet,
    status_code: int = 307,
) -> RedirectResponse:
    """Redirect to ``url`` carrying every staged cookie."""
    return pending.apply(RedirectResponse(url=url, status_code=status_code))
