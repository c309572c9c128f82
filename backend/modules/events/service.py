"""
Event service implementation.

Orchestrates the pure lifecycle engine and the event repository. Every
mutation is a read, an engine call and a full-record overwrite (last
write wins). The stored is_active flag is refreshed on every mutation and
again whenever events are read.
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Union

from shared.results import Failure, is_failure
from shared.store import IDocumentStore, ITransaction
from shared.timestamps import utc_now

from . import lifecycle
from .exceptions import EventNotFoundError
from .interfaces import IEventService, IPostRecorder
from .models import EVENTS_COLLECTION, AttendanceStatus, Event, EventDraft
from .repository import EventRepository


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class EventService(IEventService):
    """Store-backed event service."""

    def __init__(
        self,
        store: IDocumentStore,
        recorder: Optional[IPostRecorder] = None,
        clock: Clock = utc_now,
    ):
        """
        Initialize the event service.

        Args:
            store: Document store holding the `events` collection
            recorder: Notified once per created event (the leaderboard)
            clock: Source of "now"; injectable for tests
        """
        self._store = store
        self._repository = EventRepository(store)
        self._recorder = recorder
        self._clock = clock

    async def _persist(self, event: Event) -> Union[Event, Failure]:
        failure = lifecycle.verify_event(event)
        if failure is not None:
            logger.error("Refusing to store event %s: %s", event.id, failure.message)
            return failure
        await self._repository.save_event(event)
        return event

    async def _load(self, event_id: str) -> Union[Event, Failure]:
        event = await self._repository.load(event_id)
        if event is None:
            return EventNotFoundError(event_id).to_failure()
        return event

    async def create_event(self, draft: EventDraft) -> Union[Event, Failure]:
        created = lifecycle.create_event(draft, self._clock())
        if is_failure(created):
            return created

        stored = await self._persist(created)
        if is_failure(stored):
            return stored

        if self._recorder is not None:
            self._recorder.record_posted_event(stored.created_by)
        logger.info("Event %s created by %s", stored.id, stored.created_by)
        return stored

    async def get_event(self, event_id: str) -> Union[Event, Failure]:
        event = await self._load(event_id)
        if is_failure(event):
            return event
        return lifecycle.refresh_active_flag(event, self._clock())

    async def list_events(self) -> list[Event]:
        now = self._clock()
        events = await self._repository.load_all()
        return [lifecycle.refresh_active_flag(event, now) for event in events]

    async def add_comment(
        self,
        event_id: str,
        text: str,
        user_name: str,
    ) -> Union[Event, Failure]:
        event = await self._load(event_id)
        if is_failure(event):
            return event

        updated = lifecycle.add_comment(event, text, user_name, self._clock())
        if is_failure(updated):
            return updated
        return await self._persist(updated)

    async def set_attendance(
        self,
        event_id: str,
        user_id: str,
        status: AttendanceStatus,
    ) -> Union[Event, Failure]:
        event = await self._load(event_id)
        if is_failure(event):
            return event

        updated = lifecycle.set_attendance(event, user_id, status, self._clock())
        return await self._persist(updated)

    async def rename_creator(self, old_username: str, new_username: str) -> list[Event]:
        """
        Rename a user across every event they created or commented on.

        The affected events are re-read and rewritten inside one store
        transaction, so readers never observe a half-renamed state.
        """
        candidates = [
            event.id
            for event in await self._repository.load_all()
            if event.created_by == old_username
            or any(c.user_name == old_username for c in event.comments)
        ]
        if not candidates:
            return []

        async def rename(txn: ITransaction) -> list[Event]:
            current: list[Event] = []
            for event_id in candidates:
                record = await txn.get(EVENTS_COLLECTION, event_id)
                if record is not None:
                    current.append(self._repository.from_record(record))

            renamed = lifecycle.rename_creator(current, old_username, new_username)
            changed = [new for old, new in zip(current, renamed) if new is not old]
            for event in changed:
                txn.set(EVENTS_COLLECTION, event.id, self._repository.to_record(event))
            return changed

        changed = await self._store.run_transaction(rename)
        logger.info(
            "Renamed %s -> %s across %d event(s)", old_username, new_username, len(changed)
        )
        return changed
