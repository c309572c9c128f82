"""
Timestamp helpers.

The store keeps timestamps as ISO-8601 UTC strings; in memory they are
timezone-aware datetimes. Calendar-day questions ("is this event today?")
are answered in the campus timezone.
"""

from datetime import date, datetime
from typing import Optional

import pytz

from .config import get_settings


UTC_TZ = pytz.UTC


def utc_now() -> datetime:
    """Get current time in UTC (timezone-aware)."""
    return datetime.now(UTC_TZ)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return UTC_TZ.localize(value)
    return value


def to_storage(value: datetime) -> str:
    """Convert a datetime to the store's timestamp representation."""
    return ensure_aware(value).astimezone(UTC_TZ).isoformat()


def from_storage(value: str) -> datetime:
    """Parse a stored timestamp back into an aware UTC datetime."""
    return ensure_aware(datetime.fromisoformat(value.replace("Z", "+00:00"))).astimezone(UTC_TZ)


def campus_timezone(name: Optional[str] = None) -> pytz.BaseTzInfo:
    """Timezone used for calendar-day comparisons."""
    return pytz.timezone(name or get_settings().campus_timezone)


def local_date(value: datetime, tz: Optional[pytz.BaseTzInfo] = None) -> date:
    """Calendar date of `value` in the campus timezone."""
    return ensure_aware(value).astimezone(tz or campus_timezone()).date()


def same_day(a: datetime, b: datetime, tz: Optional[pytz.BaseTzInfo] = None) -> bool:
    """True when both instants fall on the same campus calendar day."""
    zone = tz or campus_timezone()
    return local_date(a, zone) == local_date(b, zone)


def day_label(day: date) -> str:
    """Section/date label, e.g. "October 18, Sunday"."""
    return f"{day.strftime('%B')} {day.day}, {day.strftime('%A')}"
