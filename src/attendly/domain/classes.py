"""Domain models for classes and their rosters."""

from dataclasses import dataclass, field
from datetime import datetime

METADATA_FIELDS = frozenset(
    {
        "class_number",
        "class_name",
        "subject",
        "section",
        "room",
        "description",
        "schedule",
        "max_students",
        "days",
        "start_date",
        "end_date",
        "start_time",
        "end_time",
    }
)
REQUIRED_FIELDS = ("class_name", "subject", "section")
DEFAULT_MAX_STUDENTS = 30


@dataclass(frozen=True)
class ScheduleEntry:
    """One weekly meeting of a class."""

    day: str
    start_time: str
    end_time: str


@dataclass(frozen=True)
class ClassRecord:
    """Represents a class stored in the database."""

    id: str
    teacher_id: str
    class_name: str
    subject: str
    section: str
    class_code: str
    room: str = ""
    description: str = ""
    class_number: str = ""
    schedule: list[ScheduleEntry] = field(default_factory=list)
    max_students: int = DEFAULT_MAX_STUDENTS
    days: list[str] = field(default_factory=list)
    start_date: str = ""
    end_date: str = ""
    start_time: str = ""
    end_time: str = ""
    students: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def has_member(self, member_id: str) -> bool:
        """Return True when the member is on the roster."""
        return member_id in self.students


@dataclass(frozen=True)
class ClassSummary:
    """Public view of a class returned by invitation lookups."""

    id: str
    class_name: str
    subject: str
    section: str
    teacher_id: str
    schedule: list[ScheduleEntry]
    room: str
    description: str
    student_count: int


@dataclass(frozen=True)
class StudentClass:
    """A class as listed for an enrolled student."""

    record: ClassRecord
    teacher_name: str


@dataclass(frozen=True)
class JoinResult:
    """Outcome of a successful join."""

    record: ClassRecord
    joined_at: datetime
