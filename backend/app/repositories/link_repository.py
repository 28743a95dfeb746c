"""
Repositories for the id -> storage key mapping.

Two implementations share one interface:
- InMemoryLinkRepository: process-lifetime dict, the default
- StorageLinkRepository: one small JSON object per id in the bucket,
  so issued QR codes keep working across restarts
"""
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from app.models.link_record import LinkRecord, is_valid_unique_id
from app.storage.s3_client import ObjectStorageClient

logger = logging.getLogger(__name__)


class CorruptLinkRecord(Exception):
    """Raised when a persisted link record cannot be decoded."""


class LinkRepository(ABC):
    """Insert-only store of LinkRecords keyed by unique_id."""

    @abstractmethod
    def add(self, record: LinkRecord) -> None:
        """Register a new mapping."""
        pass

    @abstractmethod
    def get(self, unique_id: str) -> Optional[LinkRecord]:
        """Exact-match lookup. Returns None for unknown ids."""
        pass


class InMemoryLinkRepository(LinkRepository):
    """
    Thread-safe in-memory mapping.

    Unbounded: every upload adds an entry that lives until the process exits.
    """

    def __init__(self):
        self._records: Dict[str, LinkRecord] = {}
        self._lock = threading.Lock()

    def add(self, record: LinkRecord) -> None:
        with self._lock:
            self._records[record.unique_id] = record

    def get(self, unique_id: str) -> Optional[LinkRecord]:
        with self._lock:
            return self._records.get(unique_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class StorageLinkRepository(LinkRepository):
    """Mapping persisted as JSON objects next to the uploaded files."""

    def __init__(self, storage: ObjectStorageClient, prefix: str = "links/"):
        self.storage = storage
        self.prefix = prefix

    def _object_key(self, unique_id: str) -> str:
        return f"{self.prefix}{unique_id}.json"

    def add(self, record: LinkRecord) -> None:
        self.storage.put_json(self._object_key(record.unique_id), record.to_dict())
        logger.debug(f"Persisted link record {record.unique_id}")

    def get(self, unique_id: str) -> Optional[LinkRecord]:
        # Ids are only ever generated by us, anything else never reaches storage
        if not is_valid_unique_id(unique_id):
            return None

        object_key = self._object_key(unique_id)
        try:
            data = self.storage.get_json(object_key)
            if data is None:
                return None
            return LinkRecord.from_dict(data)
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Unreadable link record {object_key}: {e}")
            raise CorruptLinkRecord(object_key) from e
