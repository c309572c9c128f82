"""
Events module interface.

The profile and presentation layers depend on IEventService. The
leaderboard is injected through IPostRecorder so this module never
imports the aggregation code.
"""

from typing import Protocol, Union, runtime_checkable

from shared.results import Failure

from .models import AttendanceStatus, Event, EventDraft


@runtime_checkable
class IPostRecorder(Protocol):
    """Receives one notification per successfully created event."""

    def record_posted_event(self, user_name: str) -> None:
        ...


@runtime_checkable
class IEventService(Protocol):
    """
    Interface for event operations.

    All mutations go through this service: fetch, apply the lifecycle
    engine, then overwrite the full record.
    """

    async def create_event(self, draft: EventDraft) -> Union[Event, Failure]:
        """
        Validate and persist a new event, then credit its creator.

        Returns:
            The created Event, or a Failure (invalid_input / too_many_tags)
        """
        ...

    async def get_event(self, event_id: str) -> Union[Event, Failure]:
        """Fetch one event with a freshly computed is_active flag."""
        ...

    async def list_events(self) -> list[Event]:
        """All events, oldest first, with freshly computed is_active flags."""
        ...

    async def add_comment(
        self,
        event_id: str,
        text: str,
        user_name: str,
    ) -> Union[Event, Failure]:
        """Append a comment to an event."""
        ...

    async def set_attendance(
        self,
        event_id: str,
        user_id: str,
        status: AttendanceStatus,
    ) -> Union[Event, Failure]:
        """Set an account's RSVP, replacing any earlier one."""
        ...

    async def rename_creator(self, old_username: str, new_username: str) -> list[Event]:
        """Rewrite creator and comment author names across all events."""
        ...
