"""
Username registry interface.

Signup and profile code depend on IUsernameRegistry, not on the concrete
store-backed implementation.
"""

from typing import Protocol, Optional, Union, runtime_checkable

from shared.results import Failure


@runtime_checkable
class IUsernameRegistry(Protocol):
    """Case-insensitive, globally unique usernames."""

    async def is_username_available(self, username: str) -> Union[bool, Failure]:
        """
        Check whether a username can still be reserved.

        Returns:
            True/False, or Failure(invalid_input) if the format is invalid
        """
        ...

    async def reserve_username(self, username: str, user_id: str) -> Optional[Failure]:
        """
        Atomically reserve `username` for `user_id`.

        Re-reserving a name the same account already owns succeeds.

        Returns:
            None on success, Failure(conflict) if owned by someone else,
            Failure(invalid_input) if the username is invalid
        """
        ...

    async def get_username_for_account(self, user_id: str) -> Optional[str]:
        """Reverse lookup: the display username owned by an account."""
        ...

    async def delete_username(self, username: str) -> None:
        """Release a reservation (rename or account deletion)."""
        ...
