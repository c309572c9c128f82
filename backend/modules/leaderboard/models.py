"""
Leaderboard module data models.

Leaderboard entries are keyed by creator username, not account id,
matching how events record their creator.
"""

import uuid
from pydantic import BaseModel, Field


class LeaderboardEntry(BaseModel):
    """Points earned by one poster (one point per created event)."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_name: str = Field(..., description="Creator username")
    points: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class UserRef(BaseModel):
    """The identity a stats computation is about."""

    id: str = Field(..., description="Account ID (matches Attendee.user_id)")
    username: str = Field(..., description="Username (matches created_by / comment author)")

    model_config = {"frozen": True}


class UserStats(BaseModel):
    """
    Profile statistics derived from the event set and leaderboard.

    impact_score is the number of `going` RSVPs across the user's own
    events. leaderboard_rank is 1-based, 0 when the user has no entry.
    """

    events_posted: int = Field(default=0, ge=0)
    events_attended: int = Field(default=0, ge=0)
    comments_made: int = Field(default=0, ge=0)
    leaderboard_rank: int = Field(default=0, ge=0)
    points: int = Field(default=0, ge=0)
    impact_score: int = Field(default=0, ge=0)
