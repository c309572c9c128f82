"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
import jwt  # PyJWT

import pytz

from shared.config import get_settings
from shared.models import GeoPoint
from shared.store import InMemoryDocumentStore


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"

CAMPUS = pytz.timezone("America/Los_Angeles")

# Sather Gate, well inside the campus box
CAMPUS_POINT = GeoPoint(latitude=37.8719, longitude=-122.2585)


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "oski@berkeley.edu",
    expired: bool = False,
    email_verified: bool = True,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def campus_time(year: int, month: int, day: int, hour: int, minute: int = 0) -> datetime:
    """A UTC datetime for a wall-clock time on campus."""
    return CAMPUS.localize(datetime(year, month, day, hour, minute)).astimezone(pytz.UTC)


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Drop cached settings before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Provide an empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "oski@berkeley.edu"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def campus_point() -> GeoPoint:
    """A point inside the campus bounds."""
    return CAMPUS_POINT


@pytest.fixture
def at():
    """Build UTC datetimes from campus wall-clock times: at(2026, 10, 19, 12, 30)."""
    return campus_time


@pytest.fixture
def make_token():
    """Expose create_test_token to tests."""
    return create_test_token
