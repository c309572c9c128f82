"""
Events module.

Event lifecycle engine, queries and the store-backed event service.

Public API:
- IEventService / IPostRecorder: Interfaces
- EventService: Store-backed implementation
- Event, EventDraft, Comment, Attendee, EventTag, AttendanceStatus,
  EventStatus, EventStatusKind: Models
- lifecycle: classify, refresh_active_flag, add_comment, set_attendance,
  create_event, rename_creator, verify_event
- queries: events_on_day, search_events, group_by_day, events_going,
  events_posted
"""

from .models import (
    EVENTS_COLLECTION,
    Attendee,
    AttendanceStatus,
    Comment,
    Event,
    EventDraft,
    EventStatus,
    EventStatusKind,
    EventTag,
)
from .exceptions import (
    EventNotFoundError,
    EmptyCommentError,
    InvalidDraftError,
    OutsideCampusError,
    TooManyTagsError,
    DuplicateAttendanceError,
)
from .interfaces import IEventService, IPostRecorder
from .lifecycle import (
    classify,
    refresh_active_flag,
    add_comment,
    set_attendance,
    create_event,
    rename_creator,
    verify_event,
)
from .queries import (
    events_on_day,
    search_events,
    group_by_day,
    events_going,
    events_posted,
)
from .repository import EventRepository
from .service import EventService

__all__ = [
    # Models
    "EVENTS_COLLECTION",
    "Attendee",
    "AttendanceStatus",
    "Comment",
    "Event",
    "EventDraft",
    "EventStatus",
    "EventStatusKind",
    "EventTag",
    # Exceptions
    "EventNotFoundError",
    "EmptyCommentError",
    "InvalidDraftError",
    "OutsideCampusError",
    "TooManyTagsError",
    "DuplicateAttendanceError",
    # Interfaces
    "IEventService",
    "IPostRecorder",
    # Lifecycle engine
    "classify",
    "refresh_active_flag",
    "add_comment",
    "set_attendance",
    "create_event",
    "rename_creator",
    "verify_event",
    # Queries
    "events_on_day",
    "search_events",
    "group_by_day",
    "events_going",
    "events_posted",
    # Persistence and service
    "EventRepository",
    "EventService",
]
