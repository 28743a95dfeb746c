"""
Tests for link repositories.
"""
import threading
import pytest
from datetime import datetime, timezone

from app.models.link_record import LinkRecord, generate_unique_id, is_valid_unique_id
from app.repositories.link_repository import CorruptLinkRecord, InMemoryLinkRepository, StorageLinkRepository
from tests.conftest import FakeStorageClient


class TestLinkRecord:
    """Tests for LinkRecord helpers."""

    def test_generated_ids_are_valid(self):
        unique_id = generate_unique_id()
        assert is_valid_unique_id(unique_id)
        assert unique_id != generate_unique_id()

    @pytest.mark.parametrize("value", ["", "abc", "../links/x", "G" * 32, "a" * 33])
    def test_invalid_ids(self, value):
        assert is_valid_unique_id(value) is False

    def test_dict_round_trip(self):
        record = LinkRecord(
            unique_id="a" * 32,
            storage_key="resumes/1-abc-cv.pdf",
            created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        )
        assert LinkRecord.from_dict(record.to_dict()) == record


class TestInMemoryLinkRepository:
    """Tests for InMemoryLinkRepository."""

    def test_add_and_get(self):
        repo = InMemoryLinkRepository()
        record = LinkRecord(unique_id="a" * 32, storage_key="resumes/cv.pdf")

        repo.add(record)

        assert repo.get("a" * 32) == record
        assert repo.get("b" * 32) is None
        assert len(repo) == 1

    def test_concurrent_inserts(self):
        repo = InMemoryLinkRepository()
        ids = [generate_unique_id() for _ in range(200)]

        def insert(chunk):
            for unique_id in chunk:
                repo.add(LinkRecord(unique_id=unique_id, storage_key=f"resumes/{unique_id}.pdf"))

        threads = [threading.Thread(target=insert, args=(ids[i::4],)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(repo) == 200
        assert all(repo.get(unique_id).storage_key == f"resumes/{unique_id}.pdf" for unique_id in ids)


class TestStorageLinkRepository:
    """Tests for StorageLinkRepository."""

    def test_add_persists_json_object(self):
        storage = FakeStorageClient()
        repo = StorageLinkRepository(storage, prefix="links/")
        record = LinkRecord(unique_id="c" * 32, storage_key="resumes/cv.pdf")

        repo.add(record)

        assert storage.content_types[f"links/{'c' * 32}.json"] == "application/json"
        assert repo.get("c" * 32) == record

    def test_survives_new_repository_instance(self):
        storage = FakeStorageClient()
        StorageLinkRepository(storage).add(LinkRecord(unique_id="d" * 32, storage_key="resumes/cv.pdf"))

        assert StorageLinkRepository(storage).get("d" * 32).storage_key == "resumes/cv.pdf"

    def test_unknown_id(self):
        assert StorageLinkRepository(FakeStorageClient()).get("e" * 32) is None

    def test_malformed_id_never_reaches_storage(self):
        storage = FakeStorageClient()
        storage.objects["links/../resumes/x.json"] = b'{"unique_id": "x", "storage_key": "x", "created_at": "2024-01-01T00:00:00"}'

        assert StorageLinkRepository(storage).get("../resumes/x") is None

    @pytest.mark.parametrize("body", [
        b"{not json",
        b'{"unique_id": "ffff"}',
        b'{"unique_id": "f", "storage_key": "resumes/cv.pdf", "created_at": "yesterday"}',
        b"[]",
    ])
    def test_unreadable_record_raises(self, body):
        storage = FakeStorageClient()
        storage.objects[f"links/{'f' * 32}.json"] = body

        with pytest.raises(CorruptLinkRecord):
            StorageLinkRepository(storage).get("f" * 32)
