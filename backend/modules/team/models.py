"""
Team module data models.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator


class InviteMemberRequest(BaseModel):
    """Invite a new agency team member by email."""

    email: EmailStr = Field(..., description="Address the invite is sent to")
    full_name: str = Field(..., max_length=200, description="Display name for the new member")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("full_name")
    @classmethod
    def full_name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required.")
        return value


class InviteMemberResponse(BaseModel):
    """The invited member, already promoted to admin."""

    user_id: str
    email: str
    full_name: str
    role: str = "admin"
