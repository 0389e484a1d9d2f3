"""In-memory profile adapter - Implements ProfileStore protocol for development and tests."""

import threading
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from src.domain.ports import ProfileRecord


class InMemoryProfileStore:
    """Thread-safe dict of profile documents keyed by generated id."""

    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def add(self, data: dict[str, Any]) -> str:
        record_id = uuid4().hex
        with self._lock:
            self._records[record_id] = {**data, "joinedon": datetime.now(timezone.utc)}
        return record_id

    def find_by_identity(self, identity_id: str) -> list[ProfileRecord]:
        with self._lock:
            records = [ProfileRecord(id=k, data=dict(v)) for k, v in self._records.items()]
        return [r for r in records if r.identity_id == identity_id]

    def delete(self, record_id: str) -> None:
        # Deleting a missing document is a no-op, as in Firestore
        with self._lock:
            self._records.pop(record_id, None)

    def all(self) -> list[ProfileRecord]:
        with self._lock:
            return [ProfileRecord(id=k, data=dict(v)) for k, v in self._records.items()]
