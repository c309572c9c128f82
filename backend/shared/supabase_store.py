"""
Supabase-backed document store.

All collections share one table (see migrations/001_documents.sql):

    documents(collection, id, data jsonb, version, created_at, updated_at)

Writes go through the `commit_documents` Postgres function, which takes
the versions observed by a transaction's reads, verifies them under
advisory locks and applies the staged writes atomically. A version
mismatch means another writer got there first; the transaction function
is re-run against fresh data, up to Settings.transaction_max_attempts.
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from supabase import Client

from .config import get_settings
from .exceptions import StoreUnavailableError
from .repository import BaseRepository
from .store import Record, TransactionFn, T


logger = logging.getLogger(__name__)

# Postgres SQLSTATE for "deadlock detected"
DEADLOCK_DETECTED = "40P01"


class _OptimisticTransaction:
    """Records read versions and stages writes for a single attempt."""

    def __init__(self, store: "SupabaseDocumentStore"):
        self._store = store
        self.reads: dict[tuple[str, str], int] = {}
        self.writes: list[dict[str, Any]] = []

    async def get(self, collection: str, doc_id: str) -> Optional[Record]:
        for staged in reversed(self.writes):
            if staged["collection"] == collection and staged["id"] == doc_id:
                return copy.deepcopy(staged.get("data"))

        row = self._store._fetch_row(collection, doc_id)
        self.reads[(collection, doc_id)] = row["version"] if row else 0
        return row["data"] if row else None

    def set(self, collection: str, doc_id: str, record: Record) -> None:
        self.writes.append(
            {"op": "set", "collection": collection, "id": doc_id, "data": copy.deepcopy(record)}
        )

    def delete(self, collection: str, doc_id: str) -> None:
        self.writes.append({"op": "delete", "collection": collection, "id": doc_id})

    def payload(self) -> dict[str, Any]:
        return {
            "p_reads": [
                {"collection": collection, "id": doc_id, "version": version}
                for (collection, doc_id), version in self.reads.items()
            ],
            "p_writes": self.writes,
        }


class SupabaseDocumentStore(BaseRepository[Record]):
    """
    Document store over a single Supabase table.

    Note: Supabase client calls are synchronous; they are made inline from
    the async methods, matching the rest of the service layer.
    """

    def __init__(
        self,
        db: Client,
        table: Optional[str] = None,
        commit_rpc: Optional[str] = None,
        max_attempts: Optional[int] = None,
    ) -> None:
        super().__init__(db)
        settings = get_settings()
        self._table = table or settings.documents_table
        self._commit_rpc = commit_rpc or settings.transaction_rpc
        self._max_attempts = max_attempts or settings.transaction_max_attempts

    # -------------------------------------------------------------------------
    # Low-level helpers
    # -------------------------------------------------------------------------

    def _execute(self, query: Any, operation: str) -> Any:
        try:
            return query.execute()
        except Exception as e:
            logger.warning("Document store %s failed: %s", operation, e)
            raise StoreUnavailableError(
                f"Document store {operation} failed: {e}",
                details={"operation": operation, "pg_code": getattr(e, "code", None)},
            ) from e

    def _fetch_row(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        result = self._execute(
            self._db.table(self._table)
            .select("*")
            .eq("collection", collection)
            .eq("id", doc_id),
            "get",
        )
        if not result.data:
            return None
        return result.data[0]

    def _commit(self, payload: dict[str, Any]) -> bool:
        result = self._execute(self._db.rpc(self._commit_rpc, payload), "commit")
        return bool(result.data)

    def _try_commit(self, txn: _OptimisticTransaction) -> bool:
        """Commit a transaction; a deadlock abort counts as a version conflict."""
        try:
            return self._commit(txn.payload())
        except StoreUnavailableError as e:
            if e.details.get("pg_code") != DEADLOCK_DETECTED:
                raise
            return False

    # -------------------------------------------------------------------------
    # IDocumentStore
    # -------------------------------------------------------------------------

    async def put(self, collection: str, doc_id: str, record: Record) -> None:
        self._commit({
            "p_reads": [],
            "p_writes": [
                {"op": "set", "collection": collection, "id": doc_id, "data": record}
            ],
        })

    async def get(self, collection: str, doc_id: str) -> Optional[Record]:
        row = self._fetch_row(collection, doc_id)
        return row["data"] if row else None

    async def delete(self, collection: str, doc_id: str) -> None:
        self._commit({
            "p_reads": [],
            "p_writes": [{"op": "delete", "collection": collection, "id": doc_id}],
        })

    async def query_by_field(
        self,
        collection: str,
        field: str,
        value: Any,
        limit: Optional[int] = None,
    ) -> list[Record]:
        query = (
            self._db.table(self._table)
            .select("*")
            .eq("collection", collection)
            .eq(f"data->>{field}", value)
            .order("created_at")
        )
        if limit is not None:
            query = query.limit(limit)
        result = self._execute(query, "query")
        return [row["data"] for row in result.data]

    async def list_all(self, collection: str) -> list[Record]:
        result = self._execute(
            self._db.table(self._table)
            .select("*")
            .eq("collection", collection)
            .order("created_at"),
            "list",
        )
        return [row["data"] for row in result.data]

    async def run_transaction(self, fn: TransactionFn[T]) -> T:
        for attempt in range(1, self._max_attempts + 1):
            txn = _OptimisticTransaction(self)
            result = await fn(txn)
            if not txn.writes:
                return result
            if self._try_commit(txn):
                logger.debug(
                    "Committed transaction with %d write(s) on attempt %d",
                    len(txn.writes),
                    attempt,
                )
                return result
            logger.warning(
                "Transaction version conflict (attempt %d of %d), retrying",
                attempt,
                self._max_attempts,
            )

        raise StoreUnavailableError(
            "Transaction could not commit due to concurrent updates",
            code="TRANSACTION_CONTENTION",
            details={
                "attempts": self._max_attempts,
                "at": datetime.now(timezone.utc).isoformat(),
            },
        )
