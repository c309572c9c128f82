"""
Input validators for signup and username creation.

Pure functions with no I/O. Limits, the institutional email domain and
the reserved-name list come from Settings. Each validate_* function runs
its checks in a fixed order and returns the first failure, so the same
input always produces the same message.
"""

import re
from typing import Optional

from shared.config import get_settings

from .models import ValidationErrorKind, ValidationIssue


USERNAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


def _email_pattern(domain: str) -> re.Pattern[str]:
    return re.compile(r"^[A-Za-z0-9._%+-]+" + re.escape(domain) + r"$")


def _issue(kind: ValidationErrorKind, field: str, message: str) -> ValidationIssue:
    return ValidationIssue(kind=kind, field=field, message=message)


# -----------------------------------------------------------------------------
# Email
# -----------------------------------------------------------------------------


def is_institutional_email(email: str) -> bool:
    """True when `email` is a well-formed address on the campus domain."""
    domain = get_settings().institutional_email_domain.lower()
    normalized = email.strip().lower()

    if not normalized.endswith(domain):
        return False

    return _email_pattern(domain).match(normalized) is not None


def validate_email(email: str) -> Optional[ValidationIssue]:
    trimmed = email.strip()

    if not trimmed:
        return _issue(ValidationErrorKind.EMPTY_INPUT, "email", "Email cannot be empty")

    if not is_institutional_email(trimmed):
        domain = get_settings().institutional_email_domain
        return _issue(
            ValidationErrorKind.WRONG_DOMAIN_OR_FORMAT,
            "email",
            f"Please use a valid {domain} email address",
        )

    return None


# -----------------------------------------------------------------------------
# Password
# -----------------------------------------------------------------------------


def validate_password(password: str) -> Optional[ValidationIssue]:
    """Require a minimum length and at least one letter and one digit."""
    min_length = get_settings().min_password_length

    if not password:
        return _issue(ValidationErrorKind.EMPTY_INPUT, "password", "Password cannot be empty")

    if len(password) < min_length:
        return _issue(
            ValidationErrorKind.TOO_SHORT,
            "password",
            f"Password must be at least {min_length} characters",
        )

    has_letter = any(ch.isalpha() for ch in password)
    has_digit = any(ch.isdigit() for ch in password)
    if not (has_letter and has_digit):
        return _issue(
            ValidationErrorKind.MISSING_COMPLEXITY,
            "password",
            "Password must contain at least one letter and one number",
        )

    return None


# -----------------------------------------------------------------------------
# Username
# -----------------------------------------------------------------------------


def is_valid_username_format(username: str) -> bool:
    settings = get_settings()
    trimmed = username.strip()

    if not settings.min_username_length <= len(trimmed) <= settings.max_username_length:
        return False

    return USERNAME_PATTERN.match(trimmed) is not None


def is_reserved_username(username: str) -> bool:
    reserved = {name.lower() for name in get_settings().reserved_usernames}
    return username.strip().lower() in reserved


def validate_username(username: str) -> Optional[ValidationIssue]:
    """
    Validate a desired username.

    Checks, in order: empty, too short, too long, must start with a
    letter, allowed characters, reserved. Returns the first failure.
    """
    settings = get_settings()
    trimmed = username.strip()

    if not trimmed:
        return _issue(ValidationErrorKind.EMPTY_INPUT, "username", "Username cannot be empty")

    if len(trimmed) < settings.min_username_length:
        return _issue(
            ValidationErrorKind.TOO_SHORT,
            "username",
            f"Username must be at least {settings.min_username_length} characters",
        )

    if len(trimmed) > settings.max_username_length:
        return _issue(
            ValidationErrorKind.TOO_LONG,
            "username",
            f"Username must be less than {settings.max_username_length} characters",
        )

    if not trimmed[0].isalpha():
        return _issue(
            ValidationErrorKind.MUST_START_WITH_LETTER,
            "username",
            "Username must start with a letter",
        )

    if not is_valid_username_format(trimmed):
        return _issue(
            ValidationErrorKind.INVALID_CHARACTERS,
            "username",
            "Username can only contain letters, numbers, and underscores",
        )

    if is_reserved_username(trimmed):
        return _issue(ValidationErrorKind.RESERVED, "username", "This username is reserved")

    return None
