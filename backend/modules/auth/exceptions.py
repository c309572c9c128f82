"""
Authentication module exceptions.

Raised by identity providers and the session token validator; the auth
flow catches them and turns them into user-facing messages.
"""

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    ErrorKind,
    NotFoundError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class MissingTokenError(AuthenticationError):
    """Raised when no session token is available."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class CredentialExpiredError(AuthenticationError):
    """Raised when the session expired mid-flow; the user must sign in again."""

    def __init__(self, message: str = "Your session expired. Please sign in again."):
        super().__init__(message, code="CREDENTIAL_EXPIRED")


class EmailNotVerifiedError(AuthenticationError):
    """Raised on sign in when the email address has not been verified yet."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, email: str):
        super().__init__(
            "Please verify your email address before signing in.",
            code="EMAIL_NOT_VERIFIED",
            details={"email": email},
        )


class WrongPasswordError(AuthenticationError):
    """Raised when the password does not match."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self):
        super().__init__("Incorrect password. Please try again.", code="WRONG_PASSWORD")


class EmailAlreadyInUseError(ConflictError):
    """Raised on sign up when the email is already registered."""

    def __init__(self, email: str):
        super().__init__(
            "This email is already registered. Please sign in instead.",
            code="EMAIL_ALREADY_IN_USE",
            details={"email": email},
        )


class WeakPasswordError(ValidationError):
    """Raised when the identity provider rejects a password as too weak."""

    def __init__(self):
        super().__init__("Password is too weak", code="WEAK_PASSWORD")


class UnknownEmailError(NotFoundError):
    """Raised on sign in when no account exists for the email."""

    def __init__(self, email: str):
        super().__init__(
            "No account found with this email. Please sign up first.",
            code="UNKNOWN_EMAIL",
            details={"email": email},
        )


class NoCurrentUserError(NotFoundError):
    """Raised when an operation needs a signed-in identity and there is none."""

    def __init__(self):
        super().__init__(
            "Something went wrong. Please try signing in again.",
            code="NO_CURRENT_USER",
        )
