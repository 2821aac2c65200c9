"""Supabase implementations of the document backend."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

import httpx
from postgrest import APIError
from supabase import Client, create_client

from attendly.config import Settings
from attendly.domain.errors import BackendError, BackendPermissionError
from attendly.services.backend import DocumentBackend, Row

_logger = logging.getLogger(__name__)

INSUFFICIENT_PRIVILEGE = "42501"
INVALID_TEXT_REPRESENTATION = "22P02"

ClientFactory = Callable[[str, str], Client]


@dataclass
class SupabaseBackend(DocumentBackend):
    """Shared PostgREST query logic for both connection paths."""

    client: Client
    mode: ClassVar[str] = "unknown"

    def get(self, collection: str, doc_id: str) -> Row | None:
        """Return one row by id, if present."""
        rows = self._execute(
            self.client.table(collection).select("*").eq("id", doc_id).limit(1),
            by_id=True,
        )
        return rows[0] if rows else None

    def find(self, collection: str, field: str, value: object) -> list[Row]:
        """Return rows whose field equals value."""
        return self._execute(
            self.client.table(collection).select("*").eq(field, value)
        )

    def find_in(self, collection: str, field: str, values: list[str]) -> list[Row]:
        """Return rows whose field is one of values."""
        return self._execute(
            self.client.table(collection).select("*").in_(field, values)
        )

    def find_containing(self, collection: str, field: str, value: str) -> list[Row]:
        """Return rows whose array field contains value."""
        return self._execute(
            self.client.table(collection).select("*").contains(field, [value])
        )

    def insert(self, collection: str, data: Row) -> Row:
        """Insert a row and return it."""
        rows = self._execute(self.client.table(collection).insert(data))
        if not rows:
            raise BackendError(f"Failed to create {collection} row")
        return rows[0]

    def update(self, collection: str, doc_id: str, data: Row) -> Row | None:
        """Update a row by id and return it."""
        rows = self._execute(
            self.client.table(collection).update(data).eq("id", doc_id), by_id=True
        )
        return rows[0] if rows else None

    def upsert(self, collection: str, doc_id: str, data: Row) -> Row:
        """Merge columns into the row with doc_id."""
        rows = self._execute(
            self.client.table(collection).upsert(
                {**data, "id": doc_id}, on_conflict="id"
            )
        )
        if not rows:
            raise BackendError(f"Failed to save {collection} row")
        return rows[0]

    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a row by id."""
        rows = self._execute(
            self.client.table(collection).delete().eq("id", doc_id), by_id=True
        )
        return bool(rows)

    def add_to_set(
        self, collection: str, doc_id: str, field: str, value: str
    ) -> Row | None:
        """Append value to an array column in a single conditional update."""
        return self._set_rpc("document_add_to_set", collection, doc_id, field, value)

    def remove_from_set(
        self, collection: str, doc_id: str, field: str, value: str
    ) -> Row | None:
        """Remove value from an array column in a single conditional update."""
        return self._set_rpc(
            "document_remove_from_set", collection, doc_id, field, value
        )

    def _set_rpc(  # noqa: PLR0913
        self, function: str, collection: str, doc_id: str, field: str, value: str
    ) -> Row | None:
        rows = self._execute(
            self.client.rpc(
                function,
                {
                    "p_table": collection,
                    "p_id": doc_id,
                    "p_field": field,
                    "p_value": value,
                },
            ),
            by_id=True,
        )
        return rows[0] if rows else None

    def _execute(self, query: Any, by_id: bool = False) -> list[Row]:
        try:
            response = query.execute()
        except APIError as exc:
            if by_id and exc.code == INVALID_TEXT_REPRESENTATION:
                # an id the key column cannot parse matches no row
                return []
            raise self._translate(exc) from exc
        except httpx.HTTPError as exc:
            raise BackendError(f"Database request failed: {exc}") from exc
        return list(response.data or [])

    def _translate(self, error: APIError) -> BackendError:
        return BackendError(f"Database error: {error.message}")


@dataclass
class PrivilegedSupabaseBackend(SupabaseBackend):
    """Backend authenticated with the service-role key."""

    mode: ClassVar[str] = "privileged"


@dataclass
class ConstrainedSupabaseBackend(SupabaseBackend):
    """Backend authenticated with the anon key and subject to row-level security."""

    mode: ClassVar[str] = "constrained"

    def _translate(self, error: APIError) -> BackendError:
        if error.code == INSUFFICIENT_PRIVILEGE:
            return BackendPermissionError(
                f"Permission denied by access rules: {error.message}"
            )
        return super()._translate(error)


def create_backend(
    settings: Settings, client_factory: ClientFactory = create_client
) -> SupabaseBackend:
    """Pick the privileged backend when service credentials are configured."""
    if settings.privileged:
        _logger.info("Initializing Supabase with service role credentials")
        client = client_factory(settings.supabase_url, settings.supabase_service_key)
        return PrivilegedSupabaseBackend(client)
    _logger.info("Service role key not found, using anon key with access rules")
    client = client_factory(settings.supabase_url, settings.supabase_anon_key)
    return ConstrainedSupabaseBackend(client)
