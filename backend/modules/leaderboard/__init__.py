"""
Leaderboard and stats module.

Public API:
- Leaderboard: Per-process holder, acts as the events IPostRecorder
- record_posted_event, rename_in_leaderboard, build_leaderboard,
  compute_user_stats, leaderboard_rank: Pure aggregation functions
- LeaderboardEntry, UserRef, UserStats: Models
"""

from .models import LeaderboardEntry, UserRef, UserStats
from .aggregation import (
    record_posted_event,
    rename_in_leaderboard,
    build_leaderboard,
    compute_user_stats,
    leaderboard_rank,
)
from .service import Leaderboard

__all__ = [
    # Models
    "LeaderboardEntry",
    "UserRef",
    "UserStats",
    # Aggregation
    "record_posted_event",
    "rename_in_leaderboard",
    "build_leaderboard",
    "compute_user_stats",
    "leaderboard_rank",
    # Holder
    "Leaderboard",
]
