"""Pydantic models for request payloads."""

from pydantic import BaseModel, ConfigDict


class ScheduleEntryPayload(BaseModel):
    """One weekly meeting in a class schedule."""

    day: str
    start_time: str
    end_time: str


class ClassMetadataPayload(BaseModel):
    """Editable class metadata; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    class_number: str | None = None
    class_name: str | None = None
    subject: str | None = None
    section: str | None = None
    room: str | None = None
    description: str | None = None
    schedule: list[ScheduleEntryPayload] | None = None
    max_students: int | None = None
    days: list[str] | None = None
    start_date: str | None = None
    end_date: str | None = None
    start_time: str | None = None
    end_time: str | None = None


class CreateClassRequest(ClassMetadataPayload):
    """Payload for creating a class."""

    teacher_id: str | None = None


class JoinClassRequest(BaseModel):
    """Payload for joining a class by invitation code."""

    student_id: str | None = None
    invitation_code: str | None = None


class StudentRequest(BaseModel):
    """Payload naming the student a roster change applies to."""

    student_id: str | None = None


class ProfileUpdateRequest(BaseModel):
    """Profile fields a user may change."""

    model_config = ConfigDict(extra="ignore")

    display_name: str | None = None
    student_id: str | None = None
    teacher_id: str | None = None
    profile_picture: str | None = None
    email: str | None = None
    role: str | None = None


class ProfilesRequest(BaseModel):
    """Payload for batch profile reads."""

    user_ids: list[str] | None = None
