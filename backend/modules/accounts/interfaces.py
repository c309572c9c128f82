"""
Account module interface.
"""

from typing import Protocol, Optional, Union, runtime_checkable

from shared.results import Failure

from .models import Account, AccountLookup


@runtime_checkable
class IAccountService(Protocol):
    """User profile storage used by the auth flow and profile screens."""

    async def create_user(self, user_id: str, email: str, username: str) -> Account:
        """Create (or overwrite) the profile for a freshly reserved username."""
        ...

    async def fetch_user(self, user_id: str) -> Union[Account, Failure]:
        """
        Load a profile.

        Returns:
            The Account, or Failure(not_found)
        """
        ...

    async def user_exists(self, user_id: str) -> bool:
        """True when a profile has been created for this account."""
        ...

    async def get_user_by_email(self, email: str) -> Optional[AccountLookup]:
        """Find the account id and username registered with an email."""
        ...

    async def update_username(self, user_id: str, new_username: str) -> Union[Account, Failure]:
        """Rewrite the username stored on the profile."""
        ...
