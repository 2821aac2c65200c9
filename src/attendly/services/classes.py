"""Class lifecycle services: creation, listing, edits, and deletion."""

import base64
import logging
import re
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from attendly.domain.classes import (
    DEFAULT_MAX_STUDENTS,
    METADATA_FIELDS,
    REQUIRED_FIELDS,
    ClassRecord,
    StudentClass,
)
from attendly.domain.errors import BadInputError, InternalError, NotFoundError
from attendly.services.audit import AuditService
from attendly.services.profiles import ProfileService

_logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
CODE_SUFFIX_BYTES = 5


class ClassRepository(Protocol):
    """Persistence interface for classes."""

    def create(self, payload: dict[str, object]) -> ClassRecord:
        """Create a class and return it."""

    def get(self, class_id: str) -> ClassRecord | None:
        """Return a class by id, if present."""

    def find_by_code(self, class_code: str) -> list[ClassRecord]:
        """Return classes with the invitation code."""

    def list_by_teacher(self, teacher_id: str) -> list[ClassRecord]:
        """Return classes owned by a teacher."""

    def list_by_member(self, member_id: str) -> list[ClassRecord]:
        """Return classes whose roster holds the member."""

    def update(self, class_id: str, fields: dict[str, object]) -> ClassRecord | None:
        """Update metadata and return the class, or None if missing."""

    def delete(self, class_id: str) -> bool:
        """Delete a class and return True if it existed."""

    def add_member(self, class_id: str, member_id: str) -> ClassRecord | None:
        """Atomically add a member; None when missing or already present."""

    def remove_member(self, class_id: str, member_id: str) -> ClassRecord | None:
        """Atomically remove a member; None when missing or not present."""


def generate_class_code(subject: str, section: str) -> str:
    """Build an invitation code like ``CS-A-7QK3M2XA``.

    The suffix carries 40 random bits so codes are hard to guess.
    """
    suffix = base64.b32encode(secrets.token_bytes(CODE_SUFFIX_BYTES)).decode()
    prefix = [_WHITESPACE.sub("", part).upper() for part in (subject, section)]
    return "-".join([*prefix, suffix])


def newest_first(records: list[ClassRecord]) -> list[ClassRecord]:
    """Sort classes by creation time, newest first."""
    return sorted(
        records,
        key=lambda record: record.created_at or datetime.min.replace(tzinfo=UTC),
        reverse=True,
    )


def require(value: str | None, message: str) -> str:
    """Return a stripped identifier or raise BadInputError when blank."""
    if value is None or not value.strip():
        raise BadInputError(message)
    return value.strip()


@dataclass
class ClassService:
    """Application service for teacher-owned class records."""

    repository: ClassRepository
    profiles: ProfileService
    audit: AuditService
    code_attempts: int = 5

    def create_class(
        self, teacher_id: str | None, fields: dict[str, object]
    ) -> ClassRecord:
        """Create a class with a fresh invitation code."""
        metadata = _metadata(fields)
        if not (teacher_id and teacher_id.strip()) or not all(
            isinstance(metadata.get(name), str) and str(metadata[name]).strip()
            for name in REQUIRED_FIELDS
        ):
            raise BadInputError("Missing required fields")
        subject = str(metadata["subject"])
        section = str(metadata["section"])
        payload: dict[str, object] = {
            "class_number": "",
            "room": "",
            "description": "",
            "schedule": [],
            "max_students": DEFAULT_MAX_STUDENTS,
            "days": [],
            "start_date": "",
            "end_date": "",
            "start_time": "",
            "end_time": "",
            **metadata,
            "teacher_id": teacher_id,
            "class_code": self._unique_code(subject, section),
        }
        created = self.repository.create(payload)
        _logger.info(
            "Class created: id=%s teacher=%s code=%s",
            created.id,
            teacher_id,
            created.class_code,
        )
        self.audit.record_class_event(teacher_id, "class.created", None, created)
        return created

    def list_for_teacher(self, teacher_id: str | None) -> list[ClassRecord]:
        """Return the teacher's classes, newest first."""
        owner = require(teacher_id, "Teacher ID is required")
        return newest_first(self.repository.list_by_teacher(owner))

    def list_for_student(self, student_id: str | None) -> list[StudentClass]:
        """Return classes the student is enrolled in with teacher names."""
        member = require(student_id, "Student ID is required")
        records = newest_first(self.repository.list_by_member(member))
        if not records:
            return []
        names = self.profiles.teacher_names(
            list(dict.fromkeys(record.teacher_id for record in records))
        )
        return [
            StudentClass(record=record, teacher_name=names[record.teacher_id])
            for record in records
        ]

    def get_class(self, class_id: str | None) -> ClassRecord:
        """Return a class or raise NotFoundError."""
        key = require(class_id, "Class ID is required")
        record = self.repository.get(key)
        if record is None:
            raise NotFoundError("Class not found")
        return record

    def update_class(
        self, class_id: str | None, fields: dict[str, object]
    ) -> ClassRecord:
        """Apply a metadata-only edit.

        Roster, invitation code, and owner are never touched here.
        """
        changes = _metadata(fields)
        blank = [
            name
            for name in REQUIRED_FIELDS
            if name in changes and not str(changes[name]).strip()
        ]
        if blank:
            raise BadInputError(f"Fields cannot be blank: {', '.join(blank)}")
        current = self.get_class(class_id)
        updated = self.repository.update(current.id, changes)
        if updated is None:
            raise NotFoundError("Class not found")
        self.audit.record_class_event(
            current.teacher_id, "class.updated", current, updated
        )
        return updated

    def delete_class(
        self, class_id: str | None, actor_id: str | None = None
    ) -> ClassRecord:
        """Hard-delete a class, keeping its final roster in the audit trail.

        The owner is recorded as the actor when none is given.
        """
        current = self.get_class(class_id)
        if not self.repository.delete(current.id):
            raise NotFoundError("Class not found")
        _logger.info(
            "Class deleted: id=%s students=%s", current.id, len(current.students)
        )
        actor = actor_id.strip() if actor_id and actor_id.strip() else None
        self.audit.record_class_event(
            actor or current.teacher_id, "class.deleted", current, None
        )
        return current

    def _unique_code(self, subject: str, section: str) -> str:
        for _ in range(self.code_attempts):
            code = generate_class_code(subject, section)
            if not self.repository.find_by_code(code):
                return code
            _logger.warning("Class code collision, regenerating: code=%s", code)
        raise InternalError("Failed to generate a unique class code")


def _metadata(fields: dict[str, object]) -> dict[str, object]:
    return {
        key: value
        for key, value in fields.items()
        if key in METADATA_FIELDS and value is not None
    }
