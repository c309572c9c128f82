"""
Account module data models.

Stored in the `users` collection, one document per account id:
{id, email, username, emailVerified, memberSince, points, createdAt}.
"""

from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

from shared.timestamps import utc_now


USERS_COLLECTION = "users"


class Account(BaseModel):
    """A user profile created once the username is reserved."""

    id: str = Field(..., description="Account ID (opaque, never changes)")
    email: EmailStr = Field(..., description="Institutional email address")
    username: str = Field(..., description="Current display username")
    email_verified: bool = Field(default=True, description="Whether email is verified")
    member_since: datetime = Field(default_factory=utc_now)
    created_at: datetime = Field(default_factory=utc_now)
    points: int = Field(default=0, ge=0, description="Stored points counter")


class AccountLookup(BaseModel):
    """Result of looking an account up by email."""

    user_id: str
    username: str

    model_config = {"frozen": True}
