"""Shared test fixtures."""

import copy
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from attendly.config import Settings
from attendly.containers import AppContainer, build_services
from attendly.services.backend import DocumentBackend, Row


@dataclass
class InMemoryBackend(DocumentBackend):
    """In-memory document backend for tests."""

    mode: str = "memory"
    collections: dict[str, dict[str, Row]] = field(default_factory=dict)
    queries: list[tuple[str, str, object]] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def table(self, collection: str) -> dict[str, Row]:
        return self.collections.setdefault(collection, {})

    def seed(self, collection: str, row: Row) -> Row:
        stored = {"id": str(uuid4()), **copy.deepcopy(row)}
        self.table(collection)[str(stored["id"])] = stored
        return copy.deepcopy(stored)

    def get(self, collection: str, doc_id: str) -> Row | None:
        row = self.table(collection).get(doc_id)
        return copy.deepcopy(row) if row else None

    def find(self, collection: str, field: str, value: object) -> list[Row]:
        self.queries.append(("find", collection, value))
        return [
            copy.deepcopy(row)
            for row in self.table(collection).values()
            if row.get(field) == value
        ]

    def find_in(self, collection: str, field: str, values: list[str]) -> list[Row]:
        self.queries.append(("find_in", collection, list(values)))
        return [
            copy.deepcopy(row)
            for row in self.table(collection).values()
            if row.get(field) in values
        ]

    def find_containing(self, collection: str, field: str, value: str) -> list[Row]:
        self.queries.append(("find_containing", collection, value))
        return [
            copy.deepcopy(row)
            for row in self.table(collection).values()
            if value in (row.get(field) or [])
        ]

    def insert(self, collection: str, data: Row) -> Row:
        return self.seed(collection, data)

    def update(self, collection: str, doc_id: str, data: Row) -> Row | None:
        row = self.table(collection).get(doc_id)
        if row is None:
            return None
        row.update(copy.deepcopy(data))
        return copy.deepcopy(row)

    def upsert(self, collection: str, doc_id: str, data: Row) -> Row:
        row = self.table(collection).setdefault(doc_id, {"id": doc_id})
        row.update(copy.deepcopy(data))
        return copy.deepcopy(row)

    def delete(self, collection: str, doc_id: str) -> bool:
        return self.table(collection).pop(doc_id, None) is not None

    def add_to_set(
        self, collection: str, doc_id: str, field: str, value: str
    ) -> Row | None:
        with self._lock:
            row = self.table(collection).get(doc_id)
            if row is None or value in (row.get(field) or []):
                return None
            row[field] = [*(row.get(field) or []), value]
            row["updated_at"] = datetime.now(tz=UTC).isoformat()
            return copy.deepcopy(row)

    def remove_from_set(
        self, collection: str, doc_id: str, field: str, value: str
    ) -> Row | None:
        with self._lock:
            row = self.table(collection).get(doc_id)
            if row is None or value not in (row.get(field) or []):
                return None
            row[field] = [item for item in row[field] if item != value]
            row["updated_at"] = datetime.now(tz=UTC).isoformat()
            return copy.deepcopy(row)


def class_row(**overrides: object) -> Row:
    """Return a stored class row with sensible defaults."""
    row: Row = {
        "teacher_id": "teacher-1",
        "class_name": "Algorithms",
        "subject": "CS",
        "section": "A",
        "class_code": "CS-A-SEEDED01",
        "schedule": [],
        "students": [],
        "created_at": "2025-01-01T08:00:00+00:00",
        "updated_at": "2025-01-01T08:00:00+00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        supabase_anon_key="anon-key",
    )


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def container(settings: Settings, backend: InMemoryBackend) -> AppContainer:
    return build_services(settings, backend)
