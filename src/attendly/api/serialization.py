"""JSON serialization of domain models for API responses."""

from datetime import datetime

from attendly.domain.classes import ClassRecord, ClassSummary, ScheduleEntry
from attendly.domain.profiles import ProfileRecord


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _schedule(entries: list[ScheduleEntry]) -> list[dict[str, str]]:
    return [
        {"day": entry.day, "start_time": entry.start_time, "end_time": entry.end_time}
        for entry in entries
    ]


def serialize_class(record: ClassRecord) -> dict[str, object]:
    """Serialize a full class record, roster included."""
    return {
        "id": record.id,
        "teacher_id": record.teacher_id,
        "class_number": record.class_number,
        "class_name": record.class_name,
        "subject": record.subject,
        "section": record.section,
        "room": record.room,
        "description": record.description,
        "schedule": _schedule(record.schedule),
        "max_students": record.max_students,
        "days": list(record.days),
        "start_date": record.start_date,
        "end_date": record.end_date,
        "start_time": record.start_time,
        "end_time": record.end_time,
        "class_code": record.class_code,
        "students": list(record.students),
        "created_at": _iso(record.created_at),
        "updated_at": _iso(record.updated_at),
    }


def serialize_summary(summary: ClassSummary) -> dict[str, object]:
    """Serialize the public class summary shown before joining."""
    return {
        "id": summary.id,
        "class_name": summary.class_name,
        "subject": summary.subject,
        "section": summary.section,
        "teacher_id": summary.teacher_id,
        "schedule": _schedule(summary.schedule),
        "room": summary.room,
        "description": summary.description,
        "student_count": summary.student_count,
    }


def serialize_profile(profile: ProfileRecord) -> dict[str, object]:
    """Serialize a profile."""
    return {
        "id": profile.id,
        "display_name": profile.display_name,
        "student_id": profile.student_id,
        "teacher_id": profile.teacher_id,
        "profile_picture": profile.profile_picture,
        "email": profile.email,
        "role": profile.role,
        "created_at": _iso(profile.created_at),
        "updated_at": _iso(profile.updated_at),
    }
