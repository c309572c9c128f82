"""
Tagged failure values.

Engine and service operations return either their success value or a
Failure. Callers branch with is_failure() instead of catching exceptions
for expected conditions such as an empty comment or a taken username.
"""

from typing import Any, TypeVar, Union

from pydantic import BaseModel, Field

from .exceptions import (
    ErrorKind,
    FefoError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    ExternalServiceError,
)


T = TypeVar("T")

_EXCEPTION_BY_KIND: dict[ErrorKind, type[FefoError]] = {
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.CONFLICT: ConflictError,
    ErrorKind.CREDENTIAL_EXPIRED: AuthenticationError,
}


class Failure(BaseModel):
    """
    An expected, recoverable failure of an operation.

    `reason` is a module-specific code (e.g. "username_taken",
    "empty_comment") and `message` is safe to show to the user.
    """

    kind: ErrorKind = Field(..., description="Failure category")
    reason: str = Field(..., description="Module-specific reason code")
    message: str = Field(..., description="User-facing message")
    details: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def to_exception(self) -> FefoError:
        """Convert to the matching exception for callers that raise."""
        code = self.reason.upper()
        details = dict(self.details)
        if self.kind == ErrorKind.NETWORK_ERROR:
            return ExternalServiceError(
                self.message,
                service=str(details.pop("service", "document_store")),
                code=code,
                details=details,
            )
        exc_type = _EXCEPTION_BY_KIND.get(self.kind, ValidationError)
        return exc_type(self.message, code=code, details=details)


Outcome = Union[T, Failure]


def is_failure(value: Any) -> bool:
    """Return True when an operation returned a Failure."""
    return isinstance(value, Failure)


def unwrap(value: Outcome[T]) -> T:
    """Return the success value or raise the Failure as an exception."""
    if isinstance(value, Failure):
        raise value.to_exception()
    return value
