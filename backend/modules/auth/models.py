"""
Authentication module data models.

The auth flow is a small state machine:

    Welcome -> SignUpOrSignIn -> VerificationPending(email)
                              -> UsernameCreation(email, user_id)
                              -> Authenticated

with sign out returning to Welcome from anywhere.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class AuthStep(str, Enum):
    """Screens of the signup/signin flow."""

    WELCOME = "welcome"
    SIGN_UP_OR_SIGN_IN = "sign_up_or_sign_in"
    VERIFICATION_PENDING = "verification_pending"
    USERNAME_CREATION = "username_creation"
    AUTHENTICATED = "authenticated"


class AuthFlowState(BaseModel):
    """Current step plus the data that step carries."""

    step: AuthStep
    email: Optional[str] = Field(None, description="Set for verification/username steps")
    user_id: Optional[str] = Field(None, description="Set for the username step")

    model_config = {"frozen": True}

    @classmethod
    def welcome(cls) -> "AuthFlowState":
        return cls(step=AuthStep.WELCOME)

    @classmethod
    def sign_up_or_sign_in(cls) -> "AuthFlowState":
        return cls(step=AuthStep.SIGN_UP_OR_SIGN_IN)

    @classmethod
    def verification_pending(cls, email: str) -> "AuthFlowState":
        return cls(step=AuthStep.VERIFICATION_PENDING, email=email)

    @classmethod
    def username_creation(cls, email: str, user_id: str) -> "AuthFlowState":
        return cls(step=AuthStep.USERNAME_CREATION, email=email, user_id=user_id)

    @classmethod
    def authenticated(cls) -> "AuthFlowState":
        return cls(step=AuthStep.AUTHENTICATED)


class UsernameAvailability(str, Enum):
    """Live availability indicator on the username screen."""

    UNKNOWN = "unknown"
    CHECKING = "checking"
    AVAILABLE = "available"
    TAKEN = "taken"
    INVALID = "invalid"


class AuthSnapshot(BaseModel):
    """Everything a presentation layer needs to render the auth screens."""

    state: AuthFlowState
    email: str = ""
    username: str = ""
    error_message: Optional[str] = None
    is_loading: bool = False
    username_availability: UsernameAvailability = UsernameAvailability.UNKNOWN

    model_config = {"frozen": True}


class JWTPayload(BaseModel):
    """
    Decoded session token payload.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (account ID)")
    email: Optional[str] = Field(None, description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")
    email_confirmed_at: Optional[str] = Field(None, description="When the email was verified")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)
