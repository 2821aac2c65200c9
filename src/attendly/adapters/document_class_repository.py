"""Class repository backed by a document backend."""

from dataclasses import dataclass
from datetime import UTC, datetime

from attendly.domain.classes import DEFAULT_MAX_STUDENTS, ClassRecord, ScheduleEntry
from attendly.services.backend import DocumentBackend, Row
from attendly.services.classes import ClassRepository

CLASSES = "classes"


@dataclass
class DocumentClassRepository(ClassRepository):
    """Stores classes in the `classes` table."""

    backend: DocumentBackend

    def create(self, payload: dict[str, object]) -> ClassRecord:
        """Create a class row and return it."""
        now = _now()
        row = self.backend.insert(
            CLASSES,
            {
                **_serialize_fields(payload),
                "students": [],
                "created_at": now,
                "updated_at": now,
            },
        )
        return parse_class(row)

    def get(self, class_id: str) -> ClassRecord | None:
        """Return a class by id, if present."""
        row = self.backend.get(CLASSES, class_id)
        return parse_class(row) if row else None

    def find_by_code(self, class_code: str) -> list[ClassRecord]:
        """Return every class carrying the invitation code."""
        rows = self.backend.find(CLASSES, "class_code", class_code)
        return [parse_class(row) for row in rows]

    def list_by_teacher(self, teacher_id: str) -> list[ClassRecord]:
        """Return classes owned by a teacher, unordered."""
        rows = self.backend.find(CLASSES, "teacher_id", teacher_id)
        return [parse_class(row) for row in rows]

    def list_by_member(self, member_id: str) -> list[ClassRecord]:
        """Return classes whose roster holds the member, unordered."""
        rows = self.backend.find_containing(CLASSES, "students", member_id)
        return [parse_class(row) for row in rows]

    def update(self, class_id: str, fields: dict[str, object]) -> ClassRecord | None:
        """Update metadata columns and refresh updated_at."""
        row = self.backend.update(
            CLASSES, class_id, {**_serialize_fields(fields), "updated_at": _now()}
        )
        return parse_class(row) if row else None

    def delete(self, class_id: str) -> bool:
        """Delete a class row."""
        return self.backend.delete(CLASSES, class_id)

    def add_member(self, class_id: str, member_id: str) -> ClassRecord | None:
        """Add a member to the roster unless already present."""
        row = self.backend.add_to_set(CLASSES, class_id, "students", member_id)
        return parse_class(row) if row else None

    def remove_member(self, class_id: str, member_id: str) -> ClassRecord | None:
        """Remove a member from the roster if present."""
        row = self.backend.remove_from_set(CLASSES, class_id, "students", member_id)
        return parse_class(row) if row else None


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()


def _serialize_fields(fields: dict[str, object]) -> dict[str, object]:
    payload = dict(fields)
    schedule = payload.get("schedule")
    if isinstance(schedule, list):
        payload["schedule"] = [_serialize_entry(entry) for entry in schedule]
    return payload


def _serialize_entry(entry: object) -> dict[str, object]:
    if isinstance(entry, ScheduleEntry):
        return {
            "day": entry.day,
            "start_time": entry.start_time,
            "end_time": entry.end_time,
        }
    return dict(entry)  # type: ignore[call-overload]


def parse_timestamp(raw: object) -> datetime | None:
    """Parse a timestamp column that may be an ISO string or datetime."""
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def parse_class(row: Row) -> ClassRecord:
    """Parse a class row into a domain model."""
    schedule = [
        ScheduleEntry(
            day=str(entry.get("day", "")),
            start_time=str(entry.get("start_time", "")),
            end_time=str(entry.get("end_time", "")),
        )
        for entry in row.get("schedule") or []
        if isinstance(entry, dict)
    ]
    return ClassRecord(
        id=str(row["id"]),
        teacher_id=str(row.get("teacher_id", "")),
        class_name=str(row.get("class_name") or ""),
        subject=str(row.get("subject") or ""),
        section=str(row.get("section") or ""),
        class_code=str(row.get("class_code") or ""),
        room=str(row.get("room") or ""),
        description=str(row.get("description") or ""),
        class_number=str(row.get("class_number") or ""),
        schedule=schedule,
        max_students=int(row.get("max_students") or DEFAULT_MAX_STUDENTS),
        days=[str(day) for day in row.get("days") or []],
        start_date=str(row.get("start_date") or ""),
        end_date=str(row.get("end_date") or ""),
        start_time=str(row.get("start_time") or ""),
        end_time=str(row.get("end_time") or ""),
        students=[str(member) for member in row.get("students") or []],
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
