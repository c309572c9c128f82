"""
Base exception classes for the Fefo backend.

Each module should define its own exceptions that inherit from these bases.
Expected, user-correctable conditions are not raised: services build the
module exception and return exc.to_failure() (see shared.results). Real
faults, such as an unreachable store, are raised.
"""

from enum import Enum
from typing import Optional, Any


class ErrorKind(str, Enum):
    """Failure taxonomy shared by every module."""

    INVALID_INPUT = "invalid_input"          # user-correctable
    CONFLICT = "conflict"                    # e.g. username already taken
    NOT_FOUND = "not_found"                  # missing account or event
    NETWORK_ERROR = "network_error"          # transient store failure
    CREDENTIAL_EXPIRED = "credential_expired"
    TOO_MANY_TAGS = "too_many_tags"
    DUPLICATE_ATTENDANCE = "duplicate_attendance"


class FefoError(Exception):
    """
    Base exception for all Fefo errors.

    All custom exceptions should inherit from this class.
    """

    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_failure(self):
        """Convert to a Failure value for result-returning operations."""
        from .results import Failure

        return Failure(
            kind=self.kind,
            reason=self.code.lower(),
            message=self.message,
            details=dict(self.details),
        )


class NotFoundError(FefoError):
    """Resource not found."""

    kind = ErrorKind.NOT_FOUND


class ValidationError(FefoError):
    """Input validation failed."""

    kind = ErrorKind.INVALID_INPUT


class ConflictError(FefoError):
    """Resource already exists or is owned by someone else."""

    kind = ErrorKind.CONFLICT


class AuthenticationError(FefoError):
    """Authentication failed (invalid, missing or expired credentials)."""

    kind = ErrorKind.CREDENTIAL_EXPIRED


class ExternalServiceError(FefoError):
    """Error communicating with an external service."""

    kind = ErrorKind.NETWORK_ERROR

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class StoreUnavailableError(ExternalServiceError):
    """The document store could not complete a request."""

    def __init__(
        self,
        message: str,
        code: str = "STORE_UNAVAILABLE",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, service="document_store", code=code, details=details)
