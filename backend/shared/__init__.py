"""
Shared infrastructure for the Fefo backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- store / supabase_store: Document store boundary and implementations
- exceptions / results: Exception hierarchy and tagged Failure values
- timestamps: Storage and campus-calendar time helpers

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, get_supabase_auth_client, reset_client_cache
from .exceptions import (
    FefoError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    ExternalServiceError,
    StoreUnavailableError,
)
from .logging_config import configure_logging
from .models import AuthenticatedUser, GeoPoint
from .repository import BaseRepository, DocumentRepository
from .results import ErrorKind, Failure, Outcome, is_failure, unwrap
from .store import IDocumentStore, ITransaction, InMemoryDocumentStore
from .supabase_store import SupabaseDocumentStore

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "get_supabase_auth_client",
    "reset_client_cache",
    "FefoError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "ExternalServiceError",
    "StoreUnavailableError",
    "configure_logging",
    "AuthenticatedUser",
    "GeoPoint",
    "BaseRepository",
    "DocumentRepository",
    "ErrorKind",
    "Failure",
    "Outcome",
    "is_failure",
    "unwrap",
    "IDocumentStore",
    "ITransaction",
    "InMemoryDocumentStore",
    "SupabaseDocumentStore",
]
