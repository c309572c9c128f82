"""
Document store boundary.

The core consumes a small document-store contract: full-document upsert,
get, field query, list, and an atomic read-modify-write transaction.
Records are plain JSON-compatible dicts keyed by (collection, id).

InMemoryDocumentStore is for testing and development. Use
SupabaseDocumentStore (shared.supabase_store) for production.
"""

import asyncio
import copy
import logging
from typing import Any, Awaitable, Callable, Optional, Protocol, TypeVar, runtime_checkable


logger = logging.getLogger(__name__)

T = TypeVar("T")

Record = dict[str, Any]


@runtime_checkable
class ITransaction(Protocol):
    """Read/write handle passed to a transaction function."""

    async def get(self, collection: str, doc_id: str) -> Optional[Record]:
        """
        Read a document inside the transaction (None if absent).

        A write or delete staged earlier in the same transaction is
        returned in place of the stored document.
        """
        ...

    def set(self, collection: str, doc_id: str, record: Record) -> None:
        """Stage a full-document write; applied when the transaction commits."""
        ...

    def delete(self, collection: str, doc_id: str) -> None:
        """Stage a delete; applied when the transaction commits."""
        ...


TransactionFn = Callable[[ITransaction], Awaitable[T]]


@runtime_checkable
class IDocumentStore(Protocol):
    """
    Interface for the persistence boundary.

    Every collaborator that needs storage depends on this protocol,
    never on a concrete client.
    """

    async def put(self, collection: str, doc_id: str, record: Record) -> None:
        """Full-document upsert."""
        ...

    async def get(self, collection: str, doc_id: str) -> Optional[Record]:
        """Fetch a document, or None when it does not exist."""
        ...

    async def delete(self, collection: str, doc_id: str) -> None:
        """Remove a document (no-op when absent)."""
        ...

    async def query_by_field(
        self,
        collection: str,
        field: str,
        value: Any,
        limit: Optional[int] = None,
    ) -> list[Record]:
        """Return documents whose top-level `field` equals `value`."""
        ...

    async def list_all(self, collection: str) -> list[Record]:
        """Return every document in a collection, oldest first."""
        ...

    async def run_transaction(self, fn: TransactionFn[T]) -> T:
        """
        Run `fn` atomically.

        Reads made through the transaction handle and the writes it stages
        are committed together or not at all. The return value of `fn` is
        returned to the caller. If `fn` raises, nothing is written.
        """
        ...


class _BufferedTransaction:
    """Transaction handle that stages writes until commit."""

    def __init__(self, store: "InMemoryDocumentStore"):
        self._store = store
        self.writes: list[tuple[str, str, Optional[Record]]] = []

    async def get(self, collection: str, doc_id: str) -> Optional[Record]:
        # Staged writes are visible to later reads in the same transaction
        for staged_collection, staged_id, staged in reversed(self.writes):
            if staged_collection == collection and staged_id == doc_id:
                return copy.deepcopy(staged)
        return self._store._read(collection, doc_id)

    def set(self, collection: str, doc_id: str, record: Record) -> None:
        self.writes.append((collection, doc_id, copy.deepcopy(record)))

    def delete(self, collection: str, doc_id: str) -> None:
        self.writes.append((collection, doc_id, None))


class InMemoryDocumentStore:
    """
    Dict-backed document store.

    Collections keep insertion order so list_all() is stable. All
    mutations (including transactions) are serialized by one asyncio lock,
    which makes run_transaction() atomic with respect to every other writer
    in the process.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Record]] = {}
        self._lock = asyncio.Lock()

    def _read(self, collection: str, doc_id: str) -> Optional[Record]:
        record = self._collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(record) if record is not None else None

    def _write(self, collection: str, doc_id: str, record: Optional[Record]) -> None:
        documents = self._collections.setdefault(collection, {})
        if record is None:
            documents.pop(doc_id, None)
        else:
            documents[doc_id] = copy.deepcopy(record)

    async def put(self, collection: str, doc_id: str, record: Record) -> None:
        async with self._lock:
            self._write(collection, doc_id, record)

    async def get(self, collection: str, doc_id: str) -> Optional[Record]:
        return self._read(collection, doc_id)

    async def delete(self, collection: str, doc_id: str) -> None:
        async with self._lock:
            self._write(collection, doc_id, None)

    async def query_by_field(
        self,
        collection: str,
        field: str,
        value: Any,
        limit: Optional[int] = None,
    ) -> list[Record]:
        matches = [
            copy.deepcopy(record)
            for record in self._collections.get(collection, {}).values()
            if record.get(field) == value
        ]
        return matches if limit is None else matches[:limit]

    async def list_all(self, collection: str) -> list[Record]:
        return [
            copy.deepcopy(record)
            for record in self._collections.get(collection, {}).values()
        ]

    async def run_transaction(self, fn: TransactionFn[T]) -> T:
        async with self._lock:
            txn = _BufferedTransaction(self)
            result = await fn(txn)
            for collection, doc_id, record in txn.writes:
                self._write(collection, doc_id, record)
            if txn.writes:
                logger.debug("Committed transaction with %d write(s)", len(txn.writes))
            return result
