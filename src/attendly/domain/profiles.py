"""Domain models for user profiles."""

from dataclasses import dataclass
from datetime import datetime

PROFILE_FIELDS = frozenset(
    {
        "display_name",
        "student_id",
        "teacher_id",
        "profile_picture",
        "email",
        "role",
    }
)
DEFAULT_TEACHER_NAME = "Teacher"


@dataclass(frozen=True)
class ProfileRecord:
    """Profile data owned by a single user."""

    id: str
    display_name: str = ""
    student_id: str = ""
    teacher_id: str = ""
    profile_picture: str = ""
    email: str = ""
    role: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    stored: bool = True


def default_profile(user_id: str, now: datetime) -> ProfileRecord:
    """Return the empty profile shown for a user without a stored record."""
    return ProfileRecord(
        id=user_id, created_at=now, updated_at=now, stored=False
    )


def placeholder_profile(user_id: str) -> ProfileRecord:
    """Return the profile synthesized for batch reads of unknown users."""
    return ProfileRecord(
        id=user_id, display_name=f"User {user_id[:8]}", stored=False
    )
