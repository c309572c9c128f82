"""
Event repository for document store access.

Records use the wire field names shared with the mobile client:

    {id, title, description, location: {latitude, longitude}, buildingName,
     startTime, endTime, createdBy, isActive,
     comments: [{id, text, userName, timestamp}],
     tags: ["Free Food!", ...],
     attendees: [{id, userId, status}]}

Malformed comments or attendees are dropped individually and unknown tag
labels are ignored, so one bad entry never hides the whole event.
"""

import logging
from typing import Any, Optional

from shared.models import GeoPoint
from shared.repository import DocumentRepository
from shared.timestamps import from_storage, to_storage

from .models import EVENTS_COLLECTION, Attendee, AttendanceStatus, Comment, Event, EventTag


logger = logging.getLogger(__name__)


def _parse_comment(raw: dict[str, Any]) -> Optional[Comment]:
    try:
        return Comment(
            id=raw["id"],
            text=raw["text"],
            user_name=raw["userName"],
            timestamp=from_storage(raw["timestamp"]),
        )
    except (AttributeError, KeyError, TypeError, ValueError):
        return None


def _parse_attendee(raw: dict[str, Any]) -> Optional[Attendee]:
    try:
        return Attendee(
            id=raw["id"],
            user_id=raw["userId"],
            status=AttendanceStatus(raw["status"]),
        )
    except (AttributeError, KeyError, TypeError, ValueError):
        return None


def _parse_tags(labels: list[Any]) -> list[EventTag]:
    known = {tag.value for tag in EventTag}
    return [EventTag(label) for label in labels if label in known]


class EventRepository(DocumentRepository[Event]):
    """
    Repository for event documents.

    Note: This repository does NOT validate business rules.
    The lifecycle engine and service layer are responsible for that.
    """

    collection = EVENTS_COLLECTION

    def to_record(self, event: Event) -> dict[str, Any]:
        return {
            "id": event.id,
            "title": event.title,
            "description": event.description,
            "location": {
                "latitude": event.location.latitude,
                "longitude": event.location.longitude,
            },
            "buildingName": event.building_name,
            "startTime": to_storage(event.start_time),
            "endTime": to_storage(event.end_time),
            "createdBy": event.created_by,
            "isActive": event.is_active,
            "comments": [
                {
                    "id": c.id,
                    "text": c.text,
                    "userName": c.user_name,
                    "timestamp": to_storage(c.timestamp),
                }
                for c in event.comments
            ],
            "tags": [tag.value for tag in event.tags],
            "attendees": [
                {"id": a.id, "userId": a.user_id, "status": a.status.value}
                for a in event.attendees
            ],
        }

    def from_record(self, record: dict[str, Any]) -> Event:
        comments = [_parse_comment(raw) for raw in record.get("comments") or []]
        attendees = [_parse_attendee(raw) for raw in record.get("attendees") or []]

        dropped = comments.count(None) + attendees.count(None)
        if dropped:
            logger.warning("Event %s: dropped %d malformed entries", record.get("id"), dropped)

        return Event(
            id=record["id"],
            title=record["title"],
            description=record["description"],
            location=GeoPoint(**record["location"]),
            building_name=record["buildingName"],
            start_time=from_storage(record["startTime"]),
            end_time=from_storage(record["endTime"]),
            created_by=record["createdBy"],
            is_active=record.get("isActive", True),
            comments=[c for c in comments if c is not None],
            tags=_parse_tags(record.get("tags") or []),
            attendees=[a for a in attendees if a is not None],
        )

    async def save_event(self, event: Event) -> None:
        await self.save(event.id, event)
