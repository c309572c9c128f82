"""
Username registry data models.

A reservation maps a lowercased username (the document id) to the
account that owns it. Stored as {userId, username, createdAt}.
"""

from datetime import datetime
from typing import Any
from pydantic import BaseModel, Field

from shared.timestamps import from_storage, to_storage, utc_now


USERNAMES_COLLECTION = "usernames"


def username_key(username: str) -> str:
    """Document id for a username: trimmed and lowercased."""
    return username.strip().lower()


class UsernameReservation(BaseModel):
    """Ownership record for one case-insensitive username."""

    user_id: str = Field(..., description="Owning account ID")
    username: str = Field(..., description="Username in its original case")
    created_at: datetime = Field(default_factory=utc_now)

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        return username_key(self.username)

    def to_record(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "username": self.username,
            "createdAt": to_storage(self.created_at),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "UsernameReservation":
        return cls(
            user_id=record["userId"],
            username=record["username"],
            created_at=from_storage(record["createdAt"]),
        )
