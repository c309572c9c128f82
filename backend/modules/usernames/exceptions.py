"""
Username registry exceptions.

Returned to callers as Failure values via to_failure().
"""

from shared.exceptions import ConflictError, ValidationError


class UsernameTakenError(ConflictError):
    """Raised when a username is reserved by a different account."""

    def __init__(self, username: str):
        super().__init__(
            "This username is already taken",
            code="USERNAME_TAKEN",
            details={"username": username},
        )


class InvalidUsernameError(ValidationError):
    """Raised when a username fails format validation."""

    def __init__(self, username: str, message: str = "Invalid username format"):
        super().__init__(
            message,
            code="INVALID_USERNAME",
            details={"username": username},
        )
