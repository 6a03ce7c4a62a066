"""
Auth callback resolver.

Turns a provider redirect (invite, magic link, recovery, OAuth) into a
session and a destination. Each request is classified once into an
``AuthFlow`` and dispatched to the matching handler; every handler ends in a
``Destination``. Failures become ``Destination.fail`` with the login error
code, never an exception.

    START ── token_hash + type ──► OTP_VERIFY
          ── code ───────────────► CODE_EXCHANGE
          ── neither ────────────► FAIL(auth_callback_failed)

After a successful code exchange the destination is, in order: an explicit
same-origin ``next``; password setup for invites (``type=invite`` or an
invite marker on the user); password setup for recovery; password setup when
the first-sign-in heuristic fires; the protected-area root.
"""

import logging
from typing import Awaitable, Callable, Optional

from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser

from .exceptions import CallbackError, NoRecognizableParamsError
from .interfaces import IIdentityProvider
from .models import (
    PASSWORD_SETUP_FLOWS,
    AuthFlow,
    Destination,
    FlowType,
    InboundAuthRequest,
)
from .redirects import safe_next_path

logger = logging.getLogger(__name__)

FlowHandler = Callable[[InboundAuthRequest], Awaitable[Destination]]


def is_first_sign_in(user: AuthenticatedUser, tolerance_seconds: float) -> bool:
    """
    Best-effort guess that this is the user's first sign-in.

    The provider sets ``last_sign_in_at`` close to ``created_at`` on the very
    first token exchange. A missing ``last_sign_in_at`` counts as equal to
    ``created_at``. Only used when no explicit flow marker is available.
    """
    if user.created_at is None:
        return False
    last_sign_in = user.last_sign_in_at or user.created_at
    return abs((last_sign_in - user.created_at).total_seconds()) < tolerance_seconds


class CallbackResolver:
    """State machine for one callback request."""

    def __init__(self, provider: IIdentityProvider, settings: Optional[Settings] = None):
        self._provider = provider
        self._settings = settings or get_settings()
        self._handlers: dict[AuthFlow, FlowHandler] = {
            AuthFlow.OTP_VERIFY: self._verify_otp,
            AuthFlow.CODE_EXCHANGE: self._exchange_code,
            AuthFlow.NO_PARAMS: self._reject,
        }

    async def resolve(self, inbound: InboundAuthRequest) -> Destination:
        flow = inbound.flow
        logger.debug("Auth callback classified as %s", flow.value)
        try:
            return await self._handlers[flow](inbound)
        except CallbackError as e:
            logger.warning("Auth callback failed (%s): %s", e.login_error, e.message)
            return Destination.fail(e.login_error)

    async def _verify_otp(self, inbound: InboundAuthRequest) -> Destination:
        await self._provider.verify_otp(inbound.token_hash, inbound.flow_type)
        if inbound.flow_type in PASSWORD_SETUP_FLOWS:
            return Destination.set_password(inbound.flow_type)
        return Destination.default()

    async def _exchange_code(self, inbound: InboundAuthRequest) -> Destination:
        user = await self._provider.exchange_code(inbound.code)
        return self.destination_after_exchange(user, inbound)

    async def _reject(self, inbound: InboundAuthRequest) -> Destination:
        raise NoRecognizableParamsError()

    def destination_after_exchange(
        self,
        user: AuthenticatedUser,
        inbound: InboundAuthRequest,
    ) -> Destination:
        next_path = safe_next_path(inbound.next)
        if next_path:
            return Destination.explicit(next_path)
        if inbound.next:
            logger.info("Discarding unsafe callback destination")

        if inbound.flow_type == FlowType.INVITE.value or user.invited_at is not None:
            return Destination.set_password(FlowType.INVITE.value)
        if inbound.flow_type == FlowType.RECOVERY.value:
            return Destination.set_password(FlowType.RECOVERY.value)
        if is_first_sign_in(user, self._settings.first_sign_in_tolerance_seconds):
            return Destination.set_password(FlowType.INVITE.value)
        return Destination.default()
