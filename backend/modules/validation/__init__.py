"""
Validation module.

Pure predicates and validators for institutional emails, passwords and
usernames.

Public API:
- is_institutional_email, validate_email
- validate_password
- is_valid_username_format, is_reserved_username, validate_username
- ValidationIssue / ValidationErrorKind: first-failure results
"""

from .models import ValidationErrorKind, ValidationIssue
from .validators import (
    is_institutional_email,
    validate_email,
    validate_password,
    is_valid_username_format,
    is_reserved_username,
    validate_username,
)

__all__ = [
    # Models
    "ValidationErrorKind",
    "ValidationIssue",
    # Validators
    "is_institutional_email",
    "validate_email",
    "validate_password",
    "is_valid_username_format",
    "is_reserved_username",
    "validate_username",
]
