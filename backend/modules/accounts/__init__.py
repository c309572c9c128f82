"""
Accounts module.

User profiles and the profile-level operations built on them.

Public API:
- IAccountService: Interface for profile storage
- AccountService: Store-backed implementation
- ProfileService: Stats, My Events and the rename cascade
- Account, AccountLookup, MyEvents: Models
- Account exceptions: AccountNotFoundError, EmptyUsernameError
"""

from .interfaces import IAccountService
from .models import USERS_COLLECTION, Account, AccountLookup
from .exceptions import AccountNotFoundError, EmptyUsernameError
from .repository import AccountRepository
from .service import AccountService
from .profile import MyEvents, ProfileService

__all__ = [
    # Interface
    "IAccountService",
    # Models
    "USERS_COLLECTION",
    "Account",
    "AccountLookup",
    "MyEvents",
    # Exceptions
    "AccountNotFoundError",
    "EmptyUsernameError",
    # Services
    "AccountRepository",
    "AccountService",
    "ProfileService",
]
