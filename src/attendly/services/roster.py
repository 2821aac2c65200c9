"""Roster mutations: joining, leaving, and removing members."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from attendly.domain.classes import ClassRecord, JoinResult
from attendly.domain.errors import (
    AlreadyEnrolledError,
    BadInputError,
    NotEnrolledError,
    NotFoundError,
)
from attendly.services.audit import AuditService
from attendly.services.classes import ClassRepository, require
from attendly.services.invitations import InvitationResolver

_logger = logging.getLogger(__name__)


@dataclass
class RosterService:
    """Applies member additions and removals to class rosters.

    Both directions use the repository's atomic set operations, so concurrent
    joins never drop each other's additions. Membership is checked up front
    to report conflicts and re-checked when the atomic call makes no change.
    """

    repository: ClassRepository
    resolver: InvitationResolver
    audit: AuditService

    def join(self, class_id: str | None, member_id: str | None) -> JoinResult:
        """Add a member to a class roster."""
        member = require(member_id, "Student ID is required")
        current = self._get(class_id)
        if current.has_member(member):
            raise AlreadyEnrolledError(current.id, member)
        updated = self.repository.add_member(current.id, member)
        if updated is None:
            latest = self._get(current.id)
            raise AlreadyEnrolledError(latest.id, member)
        _logger.info(
            "Student joined class: class=%s student=%s size=%s",
            updated.id,
            member,
            len(updated.students),
        )
        self.audit.record_class_event(member, "roster.joined", current, updated)
        return JoinResult(record=updated, joined_at=datetime.now(tz=UTC))

    def join_by_code(self, member_id: str | None, code: str | None) -> JoinResult:
        """Resolve an invitation code and join its class."""
        if not member_id or not code:
            raise BadInputError("Student ID and invitation code are required")
        record = self.resolver.resolve(code)
        return self.join(record.id, member_id)

    def leave(self, class_id: str | None, member_id: str | None) -> ClassRecord:
        """Remove the calling student from a class."""
        return self._remove(class_id, member_id, "roster.left")

    def remove_member(
        self, class_id: str | None, member_id: str | None
    ) -> ClassRecord:
        """Remove a student on the teacher's behalf."""
        return self._remove(class_id, member_id, "roster.removed")

    def _remove(
        self, class_id: str | None, member_id: str | None, event_type: str
    ) -> ClassRecord:
        member = require(member_id, "Student ID is required")
        current = self._get(class_id)
        if not current.has_member(member):
            raise NotEnrolledError(current.id, member)
        updated = self.repository.remove_member(current.id, member)
        if updated is None:
            latest = self._get(current.id)
            raise NotEnrolledError(latest.id, member)
        _logger.info(
            "Student removed from class: class=%s student=%s event=%s",
            updated.id,
            member,
            event_type,
        )
        actor = member if event_type == "roster.left" else current.teacher_id
        self.audit.record_class_event(actor, event_type, current, updated)
        return updated

    def _get(self, class_id: str | None) -> ClassRecord:
        key = require(class_id, "Class ID is required")
        record = self.repository.get(key)
        if record is None:
            raise NotFoundError("Class not found")
        return record
