"""
Account module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class AccountNotFoundError(NotFoundError):
    """Raised when no profile exists for an account id."""

    def __init__(self, user_id: str):
        super().__init__(
            "User profile not found",
            code="ACCOUNT_NOT_FOUND",
            details={"user_id": user_id},
        )


class EmptyUsernameError(ValidationError):
    """Raised when a rename is requested with a blank username."""

    def __init__(self):
        super().__init__("Username cannot be empty", code="EMPTY_USERNAME")
