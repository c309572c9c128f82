"""
Username registry implementation.

Reservations live in the `usernames` collection keyed by the lowercased
username. Reserving is a single store transaction (read, then write only
if absent), so two signups racing for the same name cannot both win.
"""

import logging
from typing import Optional, Union

from modules.validation import is_valid_username_format, validate_username
from shared.results import Failure
from shared.store import IDocumentStore, ITransaction

from .exceptions import InvalidUsernameError, UsernameTakenError
from .interfaces import IUsernameRegistry
from .models import USERNAMES_COLLECTION, UsernameReservation, username_key


logger = logging.getLogger(__name__)


class UsernameRegistry(IUsernameRegistry):
    """Store-backed username registry."""

    def __init__(self, store: IDocumentStore):
        self._store = store

    async def is_username_available(self, username: str) -> Union[bool, Failure]:
        if not is_valid_username_format(username):
            return InvalidUsernameError(username.strip()).to_failure()

        record = await self._store.get(USERNAMES_COLLECTION, username_key(username))
        return record is None

    async def reserve_username(self, username: str, user_id: str) -> Optional[Failure]:
        display = username.strip()
        issue = validate_username(display)
        if issue is not None:
            return InvalidUsernameError(display, issue.message).to_failure()

        key = username_key(display)

        async def reserve(txn: ITransaction) -> Optional[Failure]:
            existing = await txn.get(USERNAMES_COLLECTION, key)
            if existing is not None:
                if existing.get("userId") == user_id:
                    # Same account retrying (re-login or repeated submit)
                    return None
                return UsernameTakenError(display).to_failure()

            reservation = UsernameReservation(user_id=user_id, username=display)
            txn.set(USERNAMES_COLLECTION, key, reservation.to_record())
            return None

        outcome = await self._store.run_transaction(reserve)
        if outcome is None:
            logger.info("Username %s reserved for account %s", key, user_id)
        else:
            logger.debug("Username %s not reserved: %s", key, outcome.reason)
        return outcome

    async def get_username_for_account(self, user_id: str) -> Optional[str]:
        records = await self._store.query_by_field(
            USERNAMES_COLLECTION, "userId", user_id, limit=1
        )
        if not records:
            return None
        return records[0].get("username")

    async def get_reservation(self, username: str) -> Optional[UsernameReservation]:
        record = await self._store.get(USERNAMES_COLLECTION, username_key(username))
        return UsernameReservation.from_record(record) if record is not None else None

    async def delete_username(self, username: str) -> None:
        await self._store.delete(USERNAMES_COLLECTION, username_key(username))
        logger.info("Username %s released", username_key(username))

    async def change_username(
        self,
        old_username: str,
        new_username: str,
        user_id: str,
    ) -> Optional[Failure]:
        """
        Move an account's reservation from one username to another.

        The new name is reserved first; the old one is released only after
        that succeeded, and only if it still belongs to `user_id`. A change
        of case only (alice -> Alice) rewrites the display form in place.
        """
        display = new_username.strip()
        issue = validate_username(display)
        if issue is not None:
            return InvalidUsernameError(display, issue.message).to_failure()

        old_key = username_key(old_username)
        new_key = username_key(display)

        if old_key == new_key:
            async def recase(txn: ITransaction) -> Optional[Failure]:
                existing = await txn.get(USERNAMES_COLLECTION, new_key)
                if existing is not None and existing.get("userId") != user_id:
                    return UsernameTakenError(display).to_failure()
                reservation = UsernameReservation(user_id=user_id, username=display)
                txn.set(USERNAMES_COLLECTION, new_key, reservation.to_record())
                return None

            return await self._store.run_transaction(recase)

        failure = await self.reserve_username(display, user_id)
        if failure is not None:
            return failure

        async def release(txn: ITransaction) -> None:
            existing = await txn.get(USERNAMES_COLLECTION, old_key)
            if existing is not None and existing.get("userId") == user_id:
                txn.delete(USERNAMES_COLLECTION, old_key)

        await self._store.run_transaction(release)
        logger.info("Account %s renamed %s -> %s", user_id, old_key, new_key)
        return None
