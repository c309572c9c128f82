"""
Base repository classes for data access.

BaseRepository wraps a raw Supabase client (used by the Supabase document
store itself). DocumentRepository sits on top of any IDocumentStore and
handles record <-> Pydantic model mapping for one collection.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from pydantic import ValidationError as PydanticValidationError
from supabase import Client

from .store import IDocumentStore, Record


logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for repositories that talk to Supabase directly.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db


class DocumentRepository(ABC, Generic[T]):
    """
    Base class for repositories backed by a document store collection.

    Subclasses set `collection` and implement the two mapping hooks.
    Records that cannot be mapped are skipped on list (and logged), so one
    malformed document never hides the rest of a collection.

    Example:
        class EventRepository(DocumentRepository[Event]):
            collection = "events"

            def to_record(self, event: Event) -> dict: ...
            def from_record(self, record: dict) -> Event: ...
    """

    collection: str = ""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    @abstractmethod
    def to_record(self, model: T) -> Record:
        """Map a model to the stored record."""

    @abstractmethod
    def from_record(self, record: Record) -> T:
        """Map a stored record back to the model."""

    def _try_map(self, record: Record) -> Optional[T]:
        try:
            return self.from_record(record)
        except (AttributeError, KeyError, TypeError, ValueError, PydanticValidationError) as e:
            logger.warning(
                "Skipping malformed %s record %s: %s",
                self.collection,
                record.get("id", "<no id>"),
                e,
            )
            return None

    async def save(self, doc_id: str, model: T) -> None:
        await self._store.put(self.collection, doc_id, self.to_record(model))

    async def load(self, doc_id: str) -> Optional[T]:
        record = await self._store.get(self.collection, doc_id)
        if record is None:
            return None
        return self._try_map(record)

    async def load_all(self) -> list[T]:
        records = await self._store.list_all(self.collection)
        models = (self._try_map(record) for record in records)
        return [model for model in models if model is not None]

    async def find_by(self, field: str, value: Any, limit: Optional[int] = None) -> list[T]:
        records = await self._store.query_by_field(self.collection, field, value, limit)
        models = (self._try_map(record) for record in records)
        return [model for model in models if model is not None]
