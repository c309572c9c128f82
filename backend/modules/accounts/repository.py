"""
Account repository.

Maps Account models to `users` documents and back.
"""

from typing import Any, Optional

from shared.repository import DocumentRepository
from shared.timestamps import from_storage, to_storage

from .models import USERS_COLLECTION, Account


class AccountRepository(DocumentRepository[Account]):
    """Data access for user profiles."""

    collection = USERS_COLLECTION

    def to_record(self, account: Account) -> dict[str, Any]:
        return {
            "id": account.id,
            "email": account.email,
            "username": account.username,
            "emailVerified": account.email_verified,
            "memberSince": to_storage(account.member_since),
            "points": account.points,
            "createdAt": to_storage(account.created_at),
        }

    def from_record(self, record: dict[str, Any]) -> Account:
        created_at = from_storage(record["createdAt"])
        member_since = record.get("memberSince")
        return Account(
            id=record["id"],
            email=record["email"],
            username=record.get("username", ""),
            email_verified=record.get("emailVerified", True),
            member_since=from_storage(member_since) if member_since else created_at,
            created_at=created_at,
            points=record.get("points", 0),
        )

    async def find_by_email(self, email: str) -> Optional[Account]:
        matches = await self.find_by("email", email, limit=1)
        return matches[0] if matches else None
