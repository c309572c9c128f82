"""
Events module exceptions.

Expected conditions (empty comment, invalid draft, too many tags) are
returned to callers as Failure values via to_failure().
"""

from typing import Optional

from shared.exceptions import ErrorKind, NotFoundError, ValidationError


class EventNotFoundError(NotFoundError):
    """Raised when an event id does not exist."""

    def __init__(self, event_id: str):
        super().__init__(
            "Event not found",
            code="EVENT_NOT_FOUND",
            details={"event_id": event_id},
        )


class EmptyCommentError(ValidationError):
    """Raised when a comment is blank after trimming."""

    def __init__(self, event_id: Optional[str] = None):
        super().__init__(
            "Comment cannot be empty",
            code="EMPTY_COMMENT",
            details={"event_id": event_id} if event_id else None,
        )


class InvalidDraftError(ValidationError):
    """Raised when an event draft is missing a required field."""

    def __init__(self, field: str, message: str):
        super().__init__(message, code="INVALID_DRAFT", details={"field": field})


class OutsideCampusError(ValidationError):
    """Raised when an event location falls outside the campus bounds."""

    def __init__(self, latitude: float, longitude: float):
        super().__init__(
            "Event location must be on or near campus",
            code="OUTSIDE_CAMPUS",
            details={"field": "location", "latitude": latitude, "longitude": longitude},
        )


class TooManyTagsError(ValidationError):
    """Raised when more tags are selected than an event may carry."""

    kind = ErrorKind.TOO_MANY_TAGS

    def __init__(self, count: int, limit: int):
        super().__init__(
            f"Select at most {limit} tags",
            code="TOO_MANY_TAGS",
            details={"count": count, "limit": limit},
        )


class DuplicateAttendanceError(ValidationError):
    """Raised when an event holds more than one RSVP for the same account."""

    kind = ErrorKind.DUPLICATE_ATTENDANCE

    def __init__(self, event_id: str, user_id: str):
        super().__init__(
            "An account may only RSVP once per event",
            code="DUPLICATE_ATTENDANCE",
            details={"event_id": event_id, "user_id": user_id},
        )
