"""
Authentication module.

Drives the signup/signin/verification/username screens and validates
session tokens.

Public API:
- AuthFlow: Auth screen state machine
- IIdentityProvider: Interface for the external identity service
- InMemoryIdentityProvider, SupabaseIdentityProvider: Implementations
- SessionTokenValidator: Session JWT validation
- Auth exceptions: CredentialExpiredError, InvalidTokenError, etc.
"""

from .interfaces import IIdentityProvider
from .models import (
    AuthStep,
    AuthFlowState,
    AuthSnapshot,
    UsernameAvailability,
    JWTPayload,
)
from .exceptions import (
    InvalidTokenError,
    MissingTokenError,
    CredentialExpiredError,
    EmailNotVerifiedError,
    WrongPasswordError,
    EmailAlreadyInUseError,
    WeakPasswordError,
    UnknownEmailError,
    NoCurrentUserError,
)
from .tokens import SessionTokenValidator, create_session_token
from .providers import InMemoryIdentityProvider, SupabaseIdentityProvider
from .flow import AuthFlow

__all__ = [
    # Interface
    "IIdentityProvider",
    # Models
    "AuthStep",
    "AuthFlowState",
    "AuthSnapshot",
    "UsernameAvailability",
    "JWTPayload",
    # Exceptions
    "InvalidTokenError",
    "MissingTokenError",
    "CredentialExpiredError",
    "EmailNotVerifiedError",
    "WrongPasswordError",
    "EmailAlreadyInUseError",
    "WeakPasswordError",
    "UnknownEmailError",
    "NoCurrentUserError",
    # Tokens
    "SessionTokenValidator",
    "create_session_token",
    # Implementations
    "InMemoryIdentityProvider",
    "SupabaseIdentityProvider",
    "AuthFlow",
]
