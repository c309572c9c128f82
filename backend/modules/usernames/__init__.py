"""
Username registry module.

Keeps the one-to-one mapping between accounts and case-insensitive
usernames.

Public API:
- IUsernameRegistry: Interface for registry operations
- UsernameRegistry: Store-backed implementation
- UsernameReservation: Reservation record
- Registry exceptions: UsernameTakenError, InvalidUsernameError
"""

from .interfaces import IUsernameRegistry
from .models import USERNAMES_COLLECTION, UsernameReservation, username_key
from .exceptions import UsernameTakenError, InvalidUsernameError
from .service import UsernameRegistry

__all__ = [
    # Interface
    "IUsernameRegistry",
    # Models
    "USERNAMES_COLLECTION",
    "UsernameReservation",
    "username_key",
    # Exceptions
    "UsernameTakenError",
    "InvalidUsernameError",
    # Service
    "UsernameRegistry",
]
