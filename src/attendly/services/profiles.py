"""Profile services: reads with defaults, merges, and picture uploads."""

import base64
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from attendly.config import PROFILE_IMAGE_MAX_BYTES
from attendly.domain.errors import BadInputError, NotFoundError
from attendly.domain.profiles import (
    DEFAULT_TEACHER_NAME,
    PROFILE_FIELDS,
    ProfileRecord,
    default_profile,
    placeholder_profile,
)

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get(self, user_id: str) -> ProfileRecord | None:
        """Return the stored profile, if present."""

    def get_many(self, user_ids: list[str]) -> list[ProfileRecord]:
        """Return stored profiles for the ids in one query."""

    def save(self, user_id: str, fields: dict[str, object]) -> ProfileRecord:
        """Merge fields into the profile, creating it if needed."""

    def delete(self, user_id: str) -> bool:
        """Delete the profile and return True if it existed."""


def _require_user(user_id: str | None) -> str:
    if user_id is None or not user_id.strip():
        raise BadInputError("User ID is required")
    return user_id.strip()


@dataclass
class ProfileService:
    """Application service for user profiles."""

    repository: ProfileRepository
    batch_size: int = 10
    image_max_bytes: int = PROFILE_IMAGE_MAX_BYTES

    def get_profile(self, user_id: str | None) -> ProfileRecord:
        """Return the stored profile or an empty default."""
        key = _require_user(user_id)
        profile = self.repository.get(key)
        if profile is None:
            return default_profile(key, datetime.now(tz=UTC))
        return profile

    def update_profile(
        self, user_id: str | None, fields: dict[str, object]
    ) -> ProfileRecord:
        """Merge profile fields; created_at is set only on first save."""
        key = _require_user(user_id)
        changes = {
            name: value
            for name, value in fields.items()
            if name in PROFILE_FIELDS and value is not None
        }
        return self._save(key, changes)

    def delete_profile(self, user_id: str | None) -> None:
        """Delete a stored profile."""
        key = _require_user(user_id)
        if not self.repository.delete(key):
            raise NotFoundError("Profile not found")
        _logger.info("Profile deleted: user=%s", key)

    def remove_profile_picture(self, user_id: str | None) -> ProfileRecord:
        """Clear the profile picture of an existing profile."""
        key = _require_user(user_id)
        if self.repository.get(key) is None:
            raise NotFoundError("Profile not found")
        return self._save(key, {"profile_picture": ""})

    def get_profiles(self, user_ids: list[str] | None) -> list[ProfileRecord]:
        """Return one profile per requested id, in request order.

        Ids are read in groups of ``batch_size`` to stay under the backend's
        ``in`` filter ceiling. Unknown ids get a placeholder profile.
        """
        if not user_ids or not all(
            isinstance(user_id, str) and user_id for user_id in user_ids
        ):
            raise BadInputError("User IDs array is required")
        unique_ids = list(dict.fromkeys(user_ids))
        found: dict[str, ProfileRecord] = {}
        for start in range(0, len(unique_ids), self.batch_size):
            chunk = unique_ids[start : start + self.batch_size]
            for profile in self.repository.get_many(chunk):
                found[profile.id] = profile
        return [
            found.get(user_id) or placeholder_profile(user_id) for user_id in user_ids
        ]

    def teacher_names(self, teacher_ids: list[str]) -> dict[str, str]:
        """Map teacher ids to display names, defaulting to "Teacher"."""
        if not teacher_ids:
            return {}
        return {
            profile.id: (
                profile.display_name
                if profile.stored and profile.display_name
                else DEFAULT_TEACHER_NAME
            )
            for profile in self.get_profiles(teacher_ids)
        }

    def upload_profile_image(
        self, user_id: str | None, content_type: str | None, data: bytes
    ) -> str:
        """Store an image as a base64 data URL on the profile and return it."""
        key = _require_user(user_id)
        if not content_type or not content_type.startswith("image/"):
            raise BadInputError("File must be an image")
        if len(data) > self.image_max_bytes:
            limit_mb = self.image_max_bytes // (1024 * 1024)
            raise BadInputError(f"File size must be less than {limit_mb}MB")
        encoded = base64.b64encode(data).decode("ascii")
        data_url = f"data:{content_type};base64,{encoded}"
        self._save(key, {"profile_picture": data_url})
        _logger.info("Profile picture stored: user=%s bytes=%s", key, len(data))
        return data_url

    def _save(self, user_id: str, changes: dict[str, object]) -> ProfileRecord:
        now = datetime.now(tz=UTC).isoformat()
        payload = {**changes, "updated_at": now}
        if self.repository.get(user_id) is None:
            payload["created_at"] = now
        return self.repository.save(user_id, payload)
