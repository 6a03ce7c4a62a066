"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Read-only view of the user behind a session.

    Populated from the identity provider's user record and made available
    to route handlers via ``request.state.user``. Only used for routing and
    ownership decisions, never mutated.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: Optional[str] = Field(None, description="User's email address")

    # Timestamps used by post-auth routing
    created_at: Optional[datetime] = Field(None, description="Account creation time")
    last_sign_in_at: Optional[datetime] = Field(None, description="Last sign-in time")
    invited_at: Optional[datetime] = Field(None, description="Set when the account came from an invite")

    role: str = Field(default="client", description="Portal role (admin or client)")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from the provider
    }
