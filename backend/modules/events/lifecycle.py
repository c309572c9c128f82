"""
Event lifecycle engine.

Pure functions over Event values: status classification, the stored
`is_active` flag, comment and RSVP mutations, event creation and the
creator rename cascade. Inputs are never mutated; every mutation
returns a new Event.

Status rules (evaluated in this order):

    now > end                                   -> ENDED   "Ended"
    starts today and now > end - 15 min         -> ENDING  "Ending"
    now >= start                                -> ACTIVE  "Now"
    starts today                                -> UPCOMING "Soon"
    otherwise                                   -> UPCOMING "<Month D, Weekday>"

"Today" compares the event's start date with the current date in the
campus timezone.
"""

import uuid
from datetime import datetime, timedelta
from typing import Iterable, Optional, Union

import pytz

from shared.config import get_settings
from shared.results import Failure
from shared.timestamps import campus_timezone, day_label, ensure_aware, local_date, same_day

from .exceptions import (
    DuplicateAttendanceError,
    EmptyCommentError,
    InvalidDraftError,
    OutsideCampusError,
    TooManyTagsError,
)
from .models import (
    Attendee,
    AttendanceStatus,
    Comment,
    Event,
    EventDraft,
    EventStatus,
    EventStatusKind,
    EventTag,
)


def _new_id() -> str:
    return str(uuid.uuid4())


# -----------------------------------------------------------------------------
# Status
# -----------------------------------------------------------------------------


def classify(
    event: Event,
    now: datetime,
    tz: Optional[pytz.BaseTzInfo] = None,
) -> EventStatus:
    """Classify an event relative to `now`. Depends only on start, end and now."""
    now = ensure_aware(now)
    zone = tz or campus_timezone()
    ending_window = timedelta(minutes=get_settings().ending_soon_minutes)
    is_today = same_day(event.start_time, now, zone)

    if now > event.end_time:
        return EventStatus(kind=EventStatusKind.ENDED, is_today=is_today, label="Ended")

    if is_today and now > event.end_time - ending_window:
        return EventStatus(kind=EventStatusKind.ENDING, is_today=True, label="Ending")

    if now >= event.start_time:
        return EventStatus(kind=EventStatusKind.ACTIVE, is_today=is_today, label="Now")

    if is_today:
        return EventStatus(kind=EventStatusKind.UPCOMING, is_today=True, label="Soon")

    return EventStatus(
        kind=EventStatusKind.UPCOMING,
        is_today=False,
        label=day_label(local_date(event.start_time, zone)),
    )


def refresh_active_flag(event: Event, now: datetime) -> Event:
    """Recompute the stored is_active flag (end_time > now)."""
    now = ensure_aware(now)
    is_active = event.end_time > now
    if is_active == event.is_active:
        return event
    return event.model_copy(update={"is_active": is_active})


# -----------------------------------------------------------------------------
# Mutations
# -----------------------------------------------------------------------------


def add_comment(
    event: Event,
    text: str,
    user_name: str,
    now: datetime,
) -> Union[Event, Failure]:
    """Append a comment (trimmed, clamped to the length limit)."""
    trimmed = text.strip()
    if not trimmed:
        return EmptyCommentError(event.id).to_failure()

    limit = get_settings().comment_max_length
    comment = Comment(
        id=_new_id(),
        text=trimmed[:limit],
        user_name=user_name,
        timestamp=now,
    )
    updated = event.model_copy(update={"comments": [*event.comments, comment]})
    return refresh_active_flag(updated, now)


def set_attendance(
    event: Event,
    user_id: str,
    status: Union[AttendanceStatus, str],
    now: datetime,
) -> Event:
    """Replace this account's RSVP with a fresh record carrying `status`."""
    status = AttendanceStatus(status)
    attendees = [a for a in event.attendees if a.user_id != user_id]
    attendees.append(Attendee(id=_new_id(), user_id=user_id, status=status))
    updated = event.model_copy(update={"attendees": attendees})
    return refresh_active_flag(updated, now)


def _dedupe_tags(tags: Iterable[EventTag]) -> list[EventTag]:
    seen: list[EventTag] = []
    for tag in tags:
        if tag not in seen:
            seen.append(tag)
    return seen


def _inside_campus(latitude: float, longitude: float) -> bool:
    settings = get_settings()
    return (
        settings.campus_min_latitude <= latitude <= settings.campus_max_latitude
        and settings.campus_min_longitude <= longitude <= settings.campus_max_longitude
    )


def create_event(draft: EventDraft, now: datetime) -> Union[Event, Failure]:
    """
    Validate a draft and build a new Event.

    Returns a Failure for the first problem found: blank title, description
    or building name, no location, end not after start, too many tags, or
    (when enforced) a location outside the campus bounds.
    """
    settings = get_settings()
    title = draft.title.strip()
    description = draft.description.strip()
    building_name = draft.building_name.strip()

    if not title:
        return InvalidDraftError("title", "Title is required").to_failure()
    if not description:
        return InvalidDraftError("description", "Description is required").to_failure()
    if not building_name:
        return InvalidDraftError("building_name", "Location name is required").to_failure()
    if draft.location is None:
        return InvalidDraftError("location", "Pick a location on the map").to_failure()
    if draft.end_time <= draft.start_time:
        return InvalidDraftError("end_time", "End time must be after start time").to_failure()

    tags = _dedupe_tags(draft.tags)
    if len(tags) > settings.max_event_tags:
        return TooManyTagsError(len(tags), settings.max_event_tags).to_failure()

    location = draft.location
    if settings.enforce_campus_bounds and not _inside_campus(location.latitude, location.longitude):
        return OutsideCampusError(location.latitude, location.longitude).to_failure()

    return Event(
        id=_new_id(),
        title=title,
        description=description,
        location=location,
        building_name=building_name,
        start_time=draft.start_time,
        end_time=draft.end_time,
        created_by=draft.created_by,
        is_active=draft.end_time > ensure_aware(now),
        comments=[],
        tags=tags,
        attendees=[],
    )


def rename_creator(events: list[Event], old_username: str, new_username: str) -> list[Event]:
    """
    Rewrite `created_by` and comment authors from old to new username.

    Returns a new list; the input list and its events are left untouched,
    so a caller either adopts the whole renamed batch or none of it.
    """
    renamed: list[Event] = []
    for event in events:
        update: dict = {}
        if event.created_by == old_username:
            update["created_by"] = new_username
        if any(c.user_name == old_username for c in event.comments):
            update["comments"] = [
                c.model_copy(update={"user_name": new_username}) if c.user_name == old_username else c
                for c in event.comments
            ]
        renamed.append(event.model_copy(update=update) if update else event)
    return renamed


# -----------------------------------------------------------------------------
# Invariants
# -----------------------------------------------------------------------------


def verify_event(event: Event) -> Optional[Failure]:
    """Check the invariants every stored event must satisfy."""
    seen: set[str] = set()
    for attendee in event.attendees:
        if attendee.user_id in seen:
            return DuplicateAttendanceError(event.id, attendee.user_id).to_failure()
        seen.add(attendee.user_id)

    limit = get_settings().max_event_tags
    if len(event.tags) > limit:
        return TooManyTagsError(len(event.tags), limit).to_failure()

    if event.end_time <= event.start_time:
        return InvalidDraftError("end_time", "End time must be after start time").to_failure()

    return None
