"""Profile repository backed by a document backend."""

from dataclasses import dataclass

from attendly.adapters.document_class_repository import parse_timestamp
from attendly.domain.profiles import ProfileRecord
from attendly.services.backend import DocumentBackend, Row
from attendly.services.profiles import ProfileRepository

USER_PROFILES = "user_profiles"


@dataclass
class DocumentProfileRepository(ProfileRepository):
    """Stores profiles in the `user_profiles` table keyed by user id."""

    backend: DocumentBackend

    def get(self, user_id: str) -> ProfileRecord | None:
        """Return a stored profile, if present."""
        row = self.backend.get(USER_PROFILES, user_id)
        return _parse_profile(row) if row else None

    def get_many(self, user_ids: list[str]) -> list[ProfileRecord]:
        """Return stored profiles for the ids in a single query."""
        rows = self.backend.find_in(USER_PROFILES, "id", user_ids)
        return [_parse_profile(row) for row in rows]

    def save(self, user_id: str, fields: dict[str, object]) -> ProfileRecord:
        """Merge fields into the user's profile row."""
        return _parse_profile(self.backend.upsert(USER_PROFILES, user_id, fields))

    def delete(self, user_id: str) -> bool:
        """Delete a profile row."""
        return self.backend.delete(USER_PROFILES, user_id)


def _parse_profile(row: Row) -> ProfileRecord:
    return ProfileRecord(
        id=str(row["id"]),
        display_name=str(row.get("display_name") or ""),
        student_id=str(row.get("student_id") or ""),
        teacher_id=str(row.get("teacher_id") or ""),
        profile_picture=str(row.get("profile_picture") or ""),
        email=str(row.get("email") or ""),
        role=str(row.get("role") or ""),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
