"""Key-value record store for users, companies, reports and sessions.

Records are JSON-shaped dicts identified by their ``id`` key. Callers always
receive copies, so mutating a returned record never changes the store.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

USERS = "users"
COMPANIES = "companies"
REPORTS = "reports"
SESSIONS = "sessions"

Record = dict[str, Any]


class RecordStore(ABC):
    """Abstract base for all record store backends.

    Writes are read-modify-write cycles over a whole collection; they run
    under one re-entrant lock so concurrent writers never lose records.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @abstractmethod
    def get_all(self, collection: str) -> list[Record]:
        """Return every record of a collection (empty when it does not exist)."""
        ...

    @abstractmethod
    def has_collection(self, collection: str) -> bool:
        ...

    @abstractmethod
    def _save_all(self, collection: str, records: list[Record]) -> None:
        ...

    def add(self, collection: str, record: Record) -> Record:
        if "id" not in record:
            raise ValueError("record must have an 'id'")
        with self._lock:
            records = self.get_all(collection)
            records.append(copy.deepcopy(record))
            self._save_all(collection, records)
        return copy.deepcopy(record)

    def add_if_absent(self, collection: str, record: Record, field: str) -> bool:
        """Add ``record`` unless another record has the same ``field`` value.

        Check and insert happen atomically. Returns False when a match exists.
        """
        if "id" not in record:
            raise ValueError("record must have an 'id'")
        with self._lock:
            records = self.get_all(collection)
            if any(r.get(field) == record.get(field) for r in records):
                return False
            records.append(copy.deepcopy(record))
            self._save_all(collection, records)
        return True

    def update(self, collection: str, record: Record) -> Optional[Record]:
        """Merge ``record`` into the stored record with the same id.

        Returns the merged record, or None when no record has that id.
        """
        with self._lock:
            records = self.get_all(collection)
            for i, existing in enumerate(records):
                if existing.get("id") == record.get("id"):
                    records[i] = {**existing, **copy.deepcopy(record)}
                    self._save_all(collection, records)
                    return copy.deepcopy(records[i])
        return None

    def delete(self, collection: str, record_id: str) -> bool:
        with self._lock:
            records = self.get_all(collection)
            remaining = [r for r in records if r.get("id") != record_id]
            if len(remaining) == len(records):
                return False
            self._save_all(collection, remaining)
        return True

    def get(self, collection: str, record_id: str) -> Optional[Record]:
        for record in self.get_all(collection):
            if record.get("id") == record_id:
                return record
        return None

    def find_by_field(self, collection: str, field: str, value: Any) -> list[Record]:
        return [r for r in self.get_all(collection) if r.get(field) == value]


class InMemoryRecordStore(RecordStore):
    """Process-local store, used by default and in tests."""

    def __init__(self) -> None:
        super().__init__()
        self._collections: dict[str, list[Record]] = {}

    def get_all(self, collection: str) -> list[Record]:
        with self._lock:
            return copy.deepcopy(self._collections.get(collection, []))

    def has_collection(self, collection: str) -> bool:
        return collection in self._collections

    def _save_all(self, collection: str, records: list[Record]) -> None:
        with self._lock:
            self._collections[collection] = copy.deepcopy(records)


class JsonFileRecordStore(RecordStore):
    """One JSON document per collection under ``directory``."""

    def __init__(self, directory: str | Path) -> None:
        super().__init__()
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)

    def _path(self, collection: str) -> Path:
        return self._directory / f"{collection}.json"

    def get_all(self, collection: str) -> list[Record]:
        path = self._path(collection)
        with self._lock:
            if not path.exists():
                return []
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)

    def has_collection(self, collection: str) -> bool:
        return self._path(collection).exists()

    def _save_all(self, collection: str, records: list[Record]) -> None:
        path = self._path(collection)
        with self._lock:
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(records, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, path)
            except Exception:
                logger.exception(f"Failed to write collection '{collection}'")
                Path(tmp_name).unlink(missing_ok=True)
                raise


def create_store(store_path: str = "") -> RecordStore:
    """Build the configured backend: a JSON directory, or in-memory when empty."""
    if store_path:
        logger.info(f"Using JSON record store at {store_path}")
        return JsonFileRecordStore(store_path)
    return InMemoryRecordStore()
