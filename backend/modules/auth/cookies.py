"""
Session cookie bridge.

Adapts one request/response pair to the cookie-jar interface the identity
provider client needs:

- SessionCookieBridge reads the request's cookies and applies writes to the
  request side immediately, so code later in the same request sees them.
- PendingCookieSet collects the same writes, last write per name wins, to be
  stamped onto whatever response the request finally produces.
- CookieSessionStorage is the key/value storage handed to the Supabase auth
  client; it encodes the session into (possibly chunked) cookies.

Redirect responses built by the framework do not inherit cookies written
earlier in the request, so every exit path goes through
``PendingCookieSet.apply``.
"""

import base64
import binascii
import logging
from typing import Iterable, Iterator, Optional

from starlette.requests import Request
from starlette.responses import Response

from .models import CookieOptions, PendingCookie

logger = logging.getLogger(__name__)

BASE64_PREFIX = "base64-"
CODE_VERIFIER_SUFFIX = "-code-verifier"


class PendingCookieSet:
    """Ordered cookie writes for the current response. Last write per name wins."""

    def __init__(self) -> None:
        self._cookies: dict[str, PendingCookie] = {}

    def stage(self, cookie: PendingCookie) -> None:
        self._cookies[cookie.name] = cookie

    def get(self, name: str) -> Optional[PendingCookie]:
        return self._cookies.get(name)

    def __iter__(self) -> Iterator[PendingCookie]:
        return iter(list(self._cookies.values()))

    def __len__(self) -> int:
        return len(self._cookies)

    def __contains__(self, name: object) -> bool:
        return name in self._cookies

    def apply(self, response: Response, keep_existing: bool = False) -> Response:
        """
        Stamp every staged cookie onto ``response`` and return it.

        With ``keep_existing``, names the response already sets are skipped:
        a handler that wrote a cookie itself holds the newer value.
        """
        existing = set()
        if keep_existing:
            existing = {header.split("=", 1)[0].strip() for header in response.headers.getlist("set-cookie")}
        for cookie in self:
            if cookie.name in existing:
                continue
            response.set_cookie(cookie.name, cookie.value, **cookie.options.as_kwargs())
        return response


class SessionCookieBridge:
    """
    Two-way adapter between a request's cookie jar and the outgoing response.

    State is scoped to a single request; nothing here is shared across
    requests.
    """

    def __init__(self, request: Request, pending: Optional[PendingCookieSet] = None) -> None:
        self._request = request
        self.pending = pending if pending is not None else PendingCookieSet()

    def read_all(self) -> list[tuple[str, str]]:
        """Every cookie on the current request, verbatim."""
        return list(self._request.cookies.items())

    def write_all(self, cookies: Iterable[PendingCookie]) -> None:
        """
        Apply cookie writes to the request view and stage them for the response.

        An expiring write (``max_age <= 0``) removes the cookie from the
        request view.
        """
        jar = self._request.cookies
        for cookie in cookies:
            if cookie.is_deletion:
                jar.pop(cookie.name, None)
            else:
                jar[cookie.name] = cookie.value
            self.pending.stage(cookie)
        self._sync_cookie_header()

    def _sync_cookie_header(self) -> None:
        # Downstream handlers build their own Request from the ASGI scope, so
        # the raw Cookie header has to carry the new values as well.
        header = "; ".join(f"{name}={value}" for name, value in self._request.cookies.items())
        headers = [(key, value) for key, value in self._request.scope["headers"] if key != b"cookie"]
        if header:
            headers.append((b"cookie", header.encode("latin-1")))
        self._request.scope["headers"] = headers


def encode_cookie_value(value: str) -> str:
    encoded = base64.urlsafe_b64encode(value.encode("utf-8")).decode("ascii").rstrip("=")
    return f"{BASE64_PREFIX}{encoded}"


def decode_cookie_value(raw: str) -> Optional[str]:
    """Decode a stored value. Returns None when the cookie is corrupt."""
    if not raw.startswith(BASE64_PREFIX):
        return raw
    payload = raw[len(BASE64_PREFIX):]
    try:
        return base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        logger.warning("Ignoring undecodable session cookie")
        return None


class CookieSessionStorage:
    """
    Key/value storage for the Supabase auth client, backed by cookies.

    The auth client stores its session under one key and the PKCE code
    verifier under ``<key>-code-verifier``; both are mapped onto cookie names
    derived from ``cookie_name``. Values longer than ``chunk_size`` are split
    across ``<name>.0``, ``<name>.1``, ...
    """

    def __init__(
        self,
        bridge: SessionCookieBridge,
        cookie_name: str,
        options: Optional[CookieOptions] = None,
        chunk_size: int = 3180,
    ) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        self._bridge = bridge
        self._cookie_name = cookie_name
        self._options = options or CookieOptions()
        self._chunk_size = chunk_size

    def cookie_name_for(self, key: str) -> str:
        if key.endswith(CODE_VERIFIER_SUFFIX):
            return f"{self._cookie_name}{CODE_VERIFIER_SUFFIX}"
        return self._cookie_name

    def get_item(self, key: str) -> Optional[str]:
        name = self.cookie_name_for(key)
        jar = dict(self._bridge.read_all())

        raw = jar.get(name)
        if raw is None:
            chunks = []
            while f"{name}.{len(chunks)}" in jar:
                chunks.append(jar[f"{name}.{len(chunks)}"])
            if not chunks:
                return None
            raw = "".join(chunks)

        return decode_cookie_value(raw)

    def set_item(self, key: str, value: str) -> None:
        name = self.cookie_name_for(key)
        encoded = encode_cookie_value(value)

        if len(encoded) <= self._chunk_size:
            writes = [PendingCookie(name=name, value=encoded, options=self._options)]
        else:
            writes = [
                PendingCookie(name=f"{name}.{index}", value=encoded[start:start + self._chunk_size], options=self._options)
                for index, start in enumerate(range(0, len(encoded), self._chunk_size))
            ]

        written = {cookie.name for cookie in writes}
        self._bridge.write_all(writes + self._expire(name, keep=written))

    def remove_item(self, key: str) -> None:
        self._bridge.write_all(self._expire(self.cookie_name_for(key), keep=set()))

    def clear(self) -> None:
        """Expire the session cookie, its chunks and the code verifier."""
        self._bridge.write_all(
            self._expire(self._cookie_name, keep=set())
            + self._expire(f"{self._cookie_name}{CODE_VERIFIER_SUFFIX}", keep=set())
        )

    def _expire(self, name: str, keep: set[str]) -> list[PendingCookie]:
        """Deletion writes for ``name`` and its chunks, except those in ``keep``."""
        expired = self._options.model_copy(update={"max_age": 0})
        return [
            PendingCookie(name=existing, value="", options=expired)
            for existing, _ in self._bridge.read_all()
            if existing not in keep and _belongs_to(existing, name)
        ]


def _belongs_to(cookie: str, name: str) -> bool:
    if cookie == name:
        return True
    prefix = f"{name}."
    return cookie.startswith(prefix) and cookie[len(prefix):].isdigit()
