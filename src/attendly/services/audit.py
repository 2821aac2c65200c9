"""Audit logging service."""

from dataclasses import dataclass
from typing import Protocol

from attendly.domain.classes import ClassRecord


class AuditRepository(Protocol):
    """Persistence interface for audit events."""

    def create_event(  # noqa: PLR0913
        self,
        actor_id: str,
        entity_type: str,
        entity_id: str,
        event_type: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        """Create an audit event row."""


@dataclass
class AuditService:
    """Service for recording class and roster audit events."""

    repository: AuditRepository

    def record_class_event(
        self,
        actor_id: str,
        event_type: str,
        before: ClassRecord | None,
        after: ClassRecord | None,
    ) -> None:
        """Persist an audit event for a class change."""
        subject = after or before
        if subject is None:
            return
        self.repository.create_event(
            actor_id=actor_id,
            entity_type="class",
            entity_id=subject.id,
            event_type=event_type,
            before=_snapshot(before),
            after=_snapshot(after),
        )


def _snapshot(record: ClassRecord | None) -> dict[str, object] | None:
    if record is None:
        return None
    return {
        "class_code": record.class_code,
        "class_name": record.class_name,
        "students": list(record.students),
    }
