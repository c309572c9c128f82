"""
Account service implementation.
"""

import logging
from typing import Optional, Union

from shared.results import Failure
from shared.store import IDocumentStore

from .exceptions import AccountNotFoundError, EmptyUsernameError
from .interfaces import IAccountService
from .models import Account, AccountLookup
from .repository import AccountRepository


logger = logging.getLogger(__name__)


class AccountService(IAccountService):
    """Profile operations over the `users` collection."""

    def __init__(self, store: IDocumentStore):
        self._repository = AccountRepository(store)

    async def create_user(self, user_id: str, email: str, username: str) -> Account:
        account = Account(id=user_id, email=email.strip().lower(), username=username.strip())
        await self._repository.save(user_id, account)
        logger.info("Created profile for account %s", user_id)
        return account

    async def fetch_user(self, user_id: str) -> Union[Account, Failure]:
        account = await self._repository.load(user_id)
        if account is None:
            return AccountNotFoundError(user_id).to_failure()
        return account

    async def user_exists(self, user_id: str) -> bool:
        return await self._repository.load(user_id) is not None

    async def get_user_by_email(self, email: str) -> Optional[AccountLookup]:
        account = await self._repository.find_by_email(email.strip().lower())
        if account is None:
            return None
        return AccountLookup(user_id=account.id, username=account.username)

    async def update_username(self, user_id: str, new_username: str) -> Union[Account, Failure]:
        trimmed = new_username.strip()
        if not trimmed:
            return EmptyUsernameError().to_failure()

        account = await self._repository.load(user_id)
        if account is None:
            return AccountNotFoundError(user_id).to_failure()

        updated = account.model_copy(update={"username": trimmed})
        await self._repository.save(user_id, updated)
        return updated
