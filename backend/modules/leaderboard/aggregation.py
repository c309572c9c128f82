"""
Aggregation engine.

Pure functions deriving the leaderboard and per-user statistics from
the event set. Leaderboards are plain lists kept sorted by points
descending; the sort is stable, so entries with equal points keep the
order in which they first appeared.
"""

from typing import Iterable

from modules.events.models import AttendanceStatus, Event

from .models import LeaderboardEntry, UserRef, UserStats


def _sorted(entries: list[LeaderboardEntry]) -> list[LeaderboardEntry]:
    return sorted(entries, key=lambda entry: entry.points, reverse=True)


def record_posted_event(
    leaderboard: list[LeaderboardEntry],
    user_name: str,
) -> list[LeaderboardEntry]:
    """Award one point to `user_name`, adding an entry if needed."""
    updated: list[LeaderboardEntry] = []
    found = False
    for entry in leaderboard:
        if not found and entry.user_name == user_name:
            entry = entry.model_copy(update={"points": entry.points + 1})
            found = True
        updated.append(entry)

    if not found:
        updated.append(LeaderboardEntry(user_name=user_name, points=1))

    return _sorted(updated)


def rename_in_leaderboard(
    leaderboard: list[LeaderboardEntry],
    old_username: str,
    new_username: str,
) -> list[LeaderboardEntry]:
    """
    Relabel the first entry for `old_username`, keeping its id and points.

    An existing entry for `new_username` is left alone (entries are not
    merged).
    """
    updated = list(leaderboard)
    for index, entry in enumerate(updated):
        if entry.user_name == old_username:
            updated[index] = entry.model_copy(update={"user_name": new_username})
            break
    return updated


def build_leaderboard(events: Iterable[Event]) -> list[LeaderboardEntry]:
    """Rebuild a leaderboard by replaying events in their stored order."""
    leaderboard: list[LeaderboardEntry] = []
    for event in events:
        leaderboard = record_posted_event(leaderboard, event.created_by)
    return leaderboard


def leaderboard_rank(leaderboard: list[LeaderboardEntry], user_name: str) -> int:
    for index, entry in enumerate(leaderboard):
        if entry.user_name == user_name:
            return index + 1
    return 0


def compute_user_stats(
    events: list[Event],
    leaderboard: list[LeaderboardEntry],
    user: UserRef,
) -> UserStats:
    own_events = [e for e in events if e.created_by == user.username]

    events_attended = sum(
        1
        for e in events
        if any(a.user_id == user.id and a.status == AttendanceStatus.GOING for a in e.attendees)
    )
    comments_made = sum(
        1 for e in events for c in e.comments if c.user_name == user.username
    )
    impact_score = sum(
        1 for e in own_events for a in e.attendees if a.status == AttendanceStatus.GOING
    )
    entry = next((e for e in leaderboard if e.user_name == user.username), None)

    return UserStats(
        events_posted=max(0, len(own_events)),
        events_attended=max(0, events_attended),
        comments_made=max(0, comments_made),
        leaderboard_rank=max(0, leaderboard_rank(leaderboard, user.username)),
        points=max(0, entry.points if entry else 0),
        impact_score=max(0, impact_score),
    )
