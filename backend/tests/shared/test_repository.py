"""Tests for shared/repository.py."""

from typing import Optional
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel

from shared.repository import BaseRepository, DocumentRepository


class TestBaseRepository:
    """Tests for BaseRepository base class."""

    def test_init_stores_db_client(self):
        """Should store the database client in _db attribute."""
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    def test_subclass_can_access_db(self):
        """Subclass should be able to access _db and use it."""
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.execute.return_value.data = [
            {"id": "123", "name": "test"}
        ]

        class TestRepository(BaseRepository[dict]):
            def get_all(self) -> list[dict]:
                result = self._db.table("test").select("*").execute()
                return result.data

        repo = TestRepository(mock_db)

        assert repo.get_all() == [{"id": "123", "name": "test"}]
        mock_db.table.assert_called_once_with("test")


class Note(BaseModel):
    id: str
    body: str
    owner: Optional[str] = None


class NoteRepository(DocumentRepository[Note]):
    collection = "notes"

    def to_record(self, note: Note) -> dict:
        return {"id": note.id, "body": note.body, "ownerId": note.owner}

    def from_record(self, record: dict) -> Note:
        return Note(id=record["id"], body=record["body"], owner=record.get("ownerId"))


class TestDocumentRepository:
    """Tests for DocumentRepository over the in-memory store."""

    @pytest.mark.asyncio
    async def test_save_and_load(self, store):
        """save should write the mapped record and load should map it back."""
        repo = NoteRepository(store)
        await repo.save("n1", Note(id="n1", body="hello", owner="u1"))

        assert await store.get("notes", "n1") == {"id": "n1", "body": "hello", "ownerId": "u1"}
        assert await repo.load("n1") == Note(id="n1", body="hello", owner="u1")

    @pytest.mark.asyncio
    async def test_load_missing_returns_none(self, store):
        """load should return None for missing documents."""
        assert await NoteRepository(store).load("missing") is None

    @pytest.mark.asyncio
    async def test_malformed_records_are_skipped(self, store):
        """load_all should skip records that cannot be mapped."""
        await store.put("notes", "good", {"id": "good", "body": "ok"})
        await store.put("notes", "bad", {"id": "bad"})

        notes = await NoteRepository(store).load_all()

        assert [n.id for n in notes] == ["good"]

    @pytest.mark.asyncio
    async def test_find_by(self, store):
        """find_by should query on the stored field name."""
        repo = NoteRepository(store)
        await repo.save("a", Note(id="a", body="x", owner="u1"))
        await repo.save("b", Note(id="b", body="y", owner="u2"))

        found = await repo.find_by("ownerId", "u2")

        assert [n.id for n in found] == ["b"]

    def test_mapping_hooks_required(self, store):
        """The base class and subclasses missing a mapping hook cannot be built."""
        class HalfRepository(DocumentRepository[Note]):
            collection = "notes"

            def to_record(self, note: Note) -> dict:
                return note.model_dump()

        with pytest.raises(TypeError):
            DocumentRepository(store)
        with pytest.raises(TypeError):
            HalfRepository(store)
