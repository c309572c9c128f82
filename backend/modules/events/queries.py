"""
Read-side helpers for event lists.

These back the map (today's events), search, the day-grouped list and
the "My Events" screen.
"""

from datetime import date, datetime
from typing import Optional

import pytz

from shared.timestamps import campus_timezone, day_label, local_date

from .models import AttendanceStatus, Event


def events_on_day(
    events: list[Event],
    day: datetime,
    tz: Optional[pytz.BaseTzInfo] = None,
) -> list[Event]:
    """Events whose start falls on the same campus day as `day`."""
    zone = tz or campus_timezone()
    target = local_date(day, zone)
    return [e for e in events if local_date(e.start_time, zone) == target]


def search_events(events: list[Event], query: str) -> list[Event]:
    """Case-insensitive match on title, description, building name or tag label."""
    needle = query.strip().lower()
    if not needle:
        return []

    def matches(event: Event) -> bool:
        return (
            needle in event.title.lower()
            or needle in event.description.lower()
            or needle in event.building_name.lower()
            or any(needle in tag.value.lower() for tag in event.tags)
        )

    return [e for e in events if matches(e)]


def group_by_day(
    events: list[Event],
    tz: Optional[pytz.BaseTzInfo] = None,
) -> list[tuple[str, list[Event]]]:
    """
    Group events into (day label, events) sections.

    Sections are ordered by day ascending and events within a section by
    start time.
    """
    zone = tz or campus_timezone()
    buckets: dict[date, list[Event]] = {}
    for event in events:
        buckets.setdefault(local_date(event.start_time, zone), []).append(event)

    return [
        (day_label(day), sorted(buckets[day], key=lambda e: e.start_time))
        for day in sorted(buckets)
    ]


def events_going(events: list[Event], user_id: str) -> list[Event]:
    """Events the account has RSVP'd `going` to, newest start first."""
    going = [
        e for e in events
        if any(a.user_id == user_id and a.status == AttendanceStatus.GOING for a in e.attendees)
    ]
    return sorted(going, key=lambda e: e.start_time, reverse=True)


def events_posted(events: list[Event], user_name: str) -> list[Event]:
    """Events created by `user_name`, newest start first."""
    posted = [e for e in events if e.created_by == user_name]
    return sorted(posted, key=lambda e: e.start_time, reverse=True)
