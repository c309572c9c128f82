"""
Profile operations that span modules.

Renaming a user is a cascade: usernames are used as foreign keys by
events (creator, comment authors) and by the leaderboard. Order matters:
the new name is reserved first, so a taken name fails before anything
else is touched; the old reservation is released last.
"""

import logging
from typing import Union

from pydantic import BaseModel, Field

from modules.events import IEventService, Event, events_going, events_posted
from modules.leaderboard import Leaderboard, UserRef, UserStats
from modules.usernames.service import UsernameRegistry
from shared.results import Failure, is_failure

from .interfaces import IAccountService
from .models import Account


logger = logging.getLogger(__name__)


class MyEvents(BaseModel):
    """The "My Events" screen: RSVPs and own posts, newest first."""

    going: list[Event] = Field(default_factory=list)
    posted: list[Event] = Field(default_factory=list)


class ProfileService:
    """Stats, My Events and the username rename cascade for one account."""

    def __init__(
        self,
        accounts: IAccountService,
        registry: UsernameRegistry,
        events: IEventService,
        leaderboard: Leaderboard,
    ):
        self._accounts = accounts
        self._registry = registry
        self._events = events
        self._leaderboard = leaderboard

    async def get_user_stats(self, user_id: str) -> Union[UserStats, Failure]:
        account = await self._accounts.fetch_user(user_id)
        if is_failure(account):
            return account

        events = await self._events.list_events()
        user = UserRef(id=account.id, username=account.username)
        return self._leaderboard.stats_for(events, user)

    async def get_my_events(self, user_id: str) -> Union[MyEvents, Failure]:
        account = await self._accounts.fetch_user(user_id)
        if is_failure(account):
            return account

        events = await self._events.list_events()
        return MyEvents(
            going=events_going(events, account.id),
            posted=events_posted(events, account.username),
        )

    async def rename_username(self, user_id: str, new_username: str) -> Union[Account, Failure]:
        account = await self._accounts.fetch_user(user_id)
        if is_failure(account):
            return account

        old_username = account.username
        new_username = new_username.strip()
        if new_username == old_username:
            return account

        failure = await self._registry.change_username(old_username, new_username, user_id)
        if failure is not None:
            return failure

        await self._events.rename_creator(old_username, new_username)
        self._leaderboard.rename(old_username, new_username)
        updated = await self._accounts.update_username(user_id, new_username)

        logger.info("Account %s renamed %s -> %s", user_id, old_username, new_username)
        return updated
