"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Literal, Mapping, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from shared.config import Settings
from shared.models import AuthenticatedUser


# ============================================================================
# Cookies
# ============================================================================


class CookieOptions(BaseModel):
    """Attributes attached to a Set-Cookie header."""

    path: str = "/"
    max_age: Optional[int] = None
    domain: Optional[str] = None
    secure: bool = False
    httponly: bool = False
    samesite: Literal["lax", "strict", "none"] = "lax"

    model_config = {"frozen": True}

    def as_kwargs(self) -> dict:
        """Keyword arguments for ``Response.set_cookie``."""
        return {
            "path": self.path,
            "max_age": self.max_age,
            "domain": self.domain,
            "secure": self.secure,
            "httponly": self.httponly,
            "samesite": self.samesite,
        }


class PendingCookie(BaseModel):
    """One cookie write waiting to be stamped onto the outgoing response."""

    name: str
    value: str
    options: CookieOptions = Field(default_factory=CookieOptions)

    model_config = {"frozen": True}

    @property
    def is_deletion(self) -> bool:
        """True when this write expires the cookie."""
        return self.options.max_age is not None and self.options.max_age <= 0


# ============================================================================
# Callback flow
# ============================================================================


class FlowType(str, Enum):
    """Values the provider puts in the callback's ``type`` parameter."""

    INVITE = "invite"
    RECOVERY = "recovery"
    SIGNUP = "signup"
    MAGICLINK = "magiclink"
    EMAIL_CHANGE = "email_change"
    EMAIL = "email"


PASSWORD_SETUP_FLOWS = frozenset({FlowType.INVITE.value, FlowType.RECOVERY.value})


class AuthFlow(str, Enum):
    """Which branch of the callback state machine a request takes."""

    OTP_VERIFY = "otp_verify"
    CODE_EXCHANGE = "code_exchange"
    NO_PARAMS = "no_params"


class InboundAuthRequest(BaseModel):
    """Query parameters of one request to the callback endpoint."""

    token_hash: Optional[str] = None
    flow_type: Optional[str] = None
    code: Optional[str] = None
    next: Optional[str] = None

    model_config = {"frozen": True}

    @field_validator("token_hash", "flow_type", "code", "next", mode="before")
    @classmethod
    def blank_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = str(value)
        return value if value.strip() else None

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> "InboundAuthRequest":
        """Build from a query-parameter mapping (``token_hash``, ``type``, ``code``, ``next``)."""
        return cls(
            token_hash=params.get("token_hash"),
            flow_type=params.get("type"),
            code=params.get("code"),
            next=params.get("next"),
        )

    @property
    def flow(self) -> AuthFlow:
        """
        Classify the request.

        ``token_hash`` + ``type`` wins over ``code`` when both are present.
        """
        if self.token_hash and self.flow_type:
            return AuthFlow.OTP_VERIFY
        if self.code:
            return AuthFlow.CODE_EXCHANGE
        return AuthFlow.NO_PARAMS


class DestinationKind(str, Enum):
    """Terminal states of the callback state machine."""

    SET_PASSWORD = "set_password"
    DEFAULT = "default"
    EXPLICIT = "explicit"
    FAIL = "fail"


class Destination(BaseModel):
    """Where the callback sends the browser next."""

    kind: DestinationKind
    path: Optional[str] = None
    password_kind: Optional[str] = None
    error: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def set_password(cls, password_kind: str) -> "Destination":
        return cls(kind=DestinationKind.SET_PASSWORD, password_kind=password_kind)

    @classmethod
    def default(cls) -> "Destination":
        return cls(kind=DestinationKind.DEFAULT)

    @classmethod
    def explicit(cls, path: str) -> "Destination":
        return cls(kind=DestinationKind.EXPLICIT, path=path)

    @classmethod
    def fail(cls, error: str) -> "Destination":
        return cls(kind=DestinationKind.FAIL, error=error)

    def to_path(self, settings: Settings) -> str:
        """Render as a same-origin path with query string."""
        if self.kind is DestinationKind.SET_PASSWORD:
            return f"{settings.password_setup_path}?{urlencode({'type': self.password_kind})}"
        if self.kind is DestinationKind.EXPLICIT:
            return self.path
        if self.kind is DestinationKind.FAIL:
            return f"{settings.login_path}?{urlencode({'error': self.error})}"
        return settings.protected_prefix


# ============================================================================
# Profiles
# ============================================================================


class UserProfile(BaseModel):
    """Row of the ``profiles`` table."""

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(..., description="Email address")
    full_name: str = Field(default="", description="Display name")
    avatar_url: Optional[str] = Field(None, description="Avatar URL")
    role: Literal["admin", "client"] = Field(default="client", description="Portal role")
    title: Optional[str] = Field(None, description="Job title")
    created_at: datetime = Field(..., description="Account creation time")

    model_config = {"extra": "ignore"}


# ============================================================================
# Auth API requests/responses
# ============================================================================


class SignInRequest(BaseModel):
    """Email/password sign-in."""

    email: EmailStr
    password: str = Field(..., min_length=1)
    redirect_to: Optional[str] = Field(None, description="Where to go after sign-in")


class SetPasswordRequest(BaseModel):
    """Password setup after an invite or a recovery link."""

    password: str = Field(..., min_length=8, description="New password")
    confirm_password: str
    full_name: Optional[str] = Field(None, max_length=200)

    @field_validator("full_name")
    @classmethod
    def full_name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("Please enter your full name.")
        return value

    @model_validator(mode="after")
    def passwords_match(self) -> "SetPasswordRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match.")
        return self


class AuthRedirectResponse(BaseModel):
    """Tells the browser where to navigate after an auth action."""

    redirect_to: str


__all__ = [
    "AuthenticatedUser",
    "AuthFlow",
    "AuthRedirectResponse",
    "CookieOptions",
    "Destination",
    "DestinationKind",
    "FlowType",
    "InboundAuthRequest",
    "PASSWORD_SETUP_FLOWS",
    "PendingCookie",
    "SetPasswordRequest",
    "SignInRequest",
    "UserProfile",
]
