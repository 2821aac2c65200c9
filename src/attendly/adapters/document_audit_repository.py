"""Audit event repository backed by a document backend."""

from dataclasses import dataclass

from attendly.services.audit import AuditRepository
from attendly.services.backend import DocumentBackend


@dataclass
class DocumentAuditRepository(AuditRepository):
    """Appends rows to the `audit_events` table."""

    backend: DocumentBackend

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
        self.backend.insert(
            "audit_events",
            {
                "actor_id": actor_id,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "event_type": event_type,
                "before_json": before,
                "after_json": after,
            },
        )
