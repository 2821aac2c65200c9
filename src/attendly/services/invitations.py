"""Invitation code resolution."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from attendly.domain.classes import ClassRecord, ClassSummary
from attendly.domain.errors import BadInputError, NotFoundError
from attendly.services.classes import ClassRepository

_logger = logging.getLogger(__name__)

INVALID_CODE_MESSAGE = "Invalid invitation code. Please check the code and try again."


@dataclass
class InvitationResolver:
    """Translates invitation codes into classes."""

    repository: ClassRepository

    def resolve(self, code: str | None) -> ClassRecord:
        """Return the class for an invitation code.

        Codes are matched exactly. When legacy data holds several classes with
        the same code, the oldest one wins.
        """
        if code is None or not code.strip():
            raise BadInputError("Class code is required")
        matches = self.repository.find_by_code(code)
        if not matches:
            raise NotFoundError(INVALID_CODE_MESSAGE)
        if len(matches) > 1:
            _logger.warning(
                "Invitation code shared by %s classes: code=%s", len(matches), code
            )
        return min(
            matches,
            key=lambda record: record.created_at or datetime.max.replace(tzinfo=UTC),
        )

    def lookup(self, code: str | None) -> ClassSummary:
        """Return the public summary of the class behind a code."""
        record = self.resolve(code)
        return ClassSummary(
            id=record.id,
            class_name=record.class_name,
            subject=record.subject,
            section=record.section,
            teacher_id=record.teacher_id,
            schedule=list(record.schedule),
            room=record.room,
            description=record.description,
            student_count=len(record.students),
        )
