"""
Validation module data models.

A ValidationIssue is the "first failing reason" returned by the validators:
a stable kind for branching plus the message shown to the user.
"""

from enum import Enum
from pydantic import BaseModel, Field

from shared.results import ErrorKind, Failure


class ValidationErrorKind(str, Enum):
    """Why a piece of user input was rejected."""

    EMPTY_INPUT = "empty_input"
    WRONG_DOMAIN_OR_FORMAT = "wrong_domain_or_format"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    MISSING_COMPLEXITY = "missing_complexity"
    MUST_START_WITH_LETTER = "must_start_with_letter"
    INVALID_CHARACTERS = "invalid_characters"
    RESERVED = "reserved"


class ValidationIssue(BaseModel):
    """A single, user-facing validation failure."""

    kind: ValidationErrorKind = Field(..., description="Failure reason")
    field: str = Field(..., description="Input field: email, password or username")
    message: str = Field(..., description="Message shown to the user")

    model_config = {"frozen": True}

    def to_failure(self) -> Failure:
        return Failure(
            kind=ErrorKind.INVALID_INPUT,
            reason=self.kind.value,
            message=self.message,
            details={"field": self.field},
        )
