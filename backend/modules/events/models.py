"""
Events module data models.

An Event is stored denormalized: its comments and attendees are embedded
lists, and `created_by` / `Comment.user_name` hold usernames rather than
account ids.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from shared.models import GeoPoint
from shared.timestamps import ensure_aware


EVENTS_COLLECTION = "events"


class EventTag(str, Enum):
    """Tags offered when posting an event. Persisted by label."""

    FREE_FOOD = "Free Food!"
    SNACKS = "Snacks"
    DRINKS = "Drinks"
    CLUB = "Club"
    SEMINAR = "Seminar"
    WORKSHOP = "Workshop"
    SOCIAL = "Social"
    ACADEMIC = "Academic"
    SPORTS = "Sports"
    CULTURAL = "Cultural"


class AttendanceStatus(str, Enum):
    """RSVP choices."""

    GOING = "going"
    MAYBE = "maybe"
    NOT_GOING = "notGoing"


class EventStatusKind(str, Enum):
    """Time-derived classification of an event."""

    ENDED = "ended"
    ENDING = "ending"      # same day, inside the last minutes before end
    ACTIVE = "active"
    UPCOMING = "upcoming"


class Comment(BaseModel):
    """A comment on an event. Immutable once posted."""

    id: str
    text: str = Field(..., min_length=1)
    user_name: str = Field(..., description="Author username")
    timestamp: datetime

    model_config = {"frozen": True}

    @field_validator("timestamp")
    @classmethod
    def timestamp_is_aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)


class Attendee(BaseModel):
    """One account's RSVP to an event."""

    id: str
    user_id: str = Field(..., description="Account ID of the attendee")
    status: AttendanceStatus

    model_config = {"frozen": True}


class Event(BaseModel):
    """A posted free-food event."""

    id: str
    title: str
    description: str
    location: GeoPoint
    building_name: str = Field(..., description="Location label")
    start_time: datetime
    end_time: datetime
    created_by: str = Field(..., description="Creator username")
    is_active: bool = Field(default=True, description="end_time > now at last refresh")
    comments: list[Comment] = Field(default_factory=list)
    tags: list[EventTag] = Field(default_factory=list)
    attendees: list[Attendee] = Field(default_factory=list)

    @field_validator("start_time", "end_time")
    @classmethod
    def times_are_aware(cls, value: datetime) -> datetime:
        """Naive times are read as UTC."""
        return ensure_aware(value)


class EventDraft(BaseModel):
    """User input for a new event, validated by create_event()."""

    title: str = ""
    description: str = ""
    building_name: str = ""
    location: Optional[GeoPoint] = None
    start_time: datetime
    end_time: datetime
    created_by: str
    tags: list[EventTag] = Field(default_factory=list)

    @field_validator("start_time", "end_time")
    @classmethod
    def times_are_aware(cls, value: datetime) -> datetime:
        """Naive times are read as UTC."""
        return ensure_aware(value)


class EventStatus(BaseModel):
    """Result of classifying an event against a point in time."""

    kind: EventStatusKind
    is_today: bool = Field(..., description="Event starts on the current campus day")
    label: str = Field(..., description="Badge text: Ended, Ending, Now, Soon or a date")

    model_config = {"frozen": True}
