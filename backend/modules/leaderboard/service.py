"""
Leaderboard holder.

One Leaderboard object per process (or per request in a server context),
constructed explicitly and passed to whatever needs it. It plugs into
EventService as its IPostRecorder.
"""

import logging
from typing import Iterable, Optional

from modules.events.interfaces import IPostRecorder
from modules.events.models import Event

from .aggregation import (
    build_leaderboard,
    compute_user_stats,
    leaderboard_rank,
    record_posted_event,
    rename_in_leaderboard,
)
from .models import LeaderboardEntry, UserRef, UserStats


logger = logging.getLogger(__name__)


class Leaderboard(IPostRecorder):
    """Mutable owner of the current, sorted leaderboard list."""

    def __init__(self, entries: Optional[list[LeaderboardEntry]] = None):
        self._entries: list[LeaderboardEntry] = list(entries or [])

    @classmethod
    def from_events(cls, events: Iterable[Event]) -> "Leaderboard":
        """Restore a leaderboard from persisted events (e.g. at startup)."""
        return cls(build_leaderboard(events))

    @property
    def entries(self) -> list[LeaderboardEntry]:
        return list(self._entries)

    def rebuild(self, events: Iterable[Event]) -> None:
        """Replace the entries with a fresh derivation from `events`."""
        self._entries = build_leaderboard(events)
        logger.info("Leaderboard rebuilt with %d entries", len(self._entries))

    def record_posted_event(self, user_name: str) -> None:
        self._entries = record_posted_event(self._entries, user_name)
        logger.debug("Leaderboard: +1 for %s", user_name)

    def rename(self, old_username: str, new_username: str) -> None:
        self._entries = rename_in_leaderboard(self._entries, old_username, new_username)

    def rank_of(self, user_name: str) -> int:
        return leaderboard_rank(self._entries, user_name)

    def stats_for(self, events: list[Event], user: UserRef) -> UserStats:
        return compute_user_stats(events, self._entries, user)
