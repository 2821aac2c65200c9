"""Class, invitation, and roster endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from attendly.api.models import (
    ClassMetadataPayload,
    CreateClassRequest,
    JoinClassRequest,
    StudentRequest,
)
from attendly.api.serialization import serialize_class, serialize_summary

if TYPE_CHECKING:
    from attendly.containers import AppContainer

router = APIRouter(tags=["classes"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/classes/lookup/{code}")
async def lookup_class(code: str, request: Request) -> dict[str, object]:
    """Return the public summary of the class behind an invitation code."""
    summary = _container(request).invitation_resolver.lookup(code)
    return {"success": True, "class": serialize_summary(summary)}


@router.get("/student/classes")
async def list_student_classes(
    request: Request, student_id: str | None = None
) -> dict[str, object]:
    """Return the classes a student is enrolled in."""
    classes = _container(request).class_service.list_for_student(student_id)
    return {
        "success": True,
        "classes": [
            {**serialize_class(item.record), "teacher_name": item.teacher_name}
            for item in classes
        ],
    }


@router.post("/student/classes")
async def join_class(payload: JoinClassRequest, request: Request) -> dict[str, object]:
    """Join a class with an invitation code."""
    result = _container(request).roster_service.join_by_code(
        payload.student_id, payload.invitation_code
    )
    return {
        "success": True,
        "message": "Successfully joined class",
        "class": {
            **serialize_class(result.record),
            "joined_at": result.joined_at.isoformat(),
        },
    }


@router.delete("/student/classes/{class_id}")
async def leave_class(
    class_id: str, payload: StudentRequest, request: Request
) -> dict[str, object]:
    """Remove the calling student from a class."""
    _container(request).roster_service.leave(class_id, payload.student_id)
    return {"success": True, "message": "Successfully left the class"}


@router.get("/teacher/classes")
async def list_teacher_classes(
    request: Request, teacher_id: str | None = None
) -> dict[str, object]:
    """Return the classes a teacher owns, newest first."""
    classes = _container(request).class_service.list_for_teacher(teacher_id)
    return {"success": True, "classes": [serialize_class(item) for item in classes]}


@router.post("/teacher/classes")
async def create_class(
    payload: CreateClassRequest, request: Request
) -> dict[str, object]:
    """Create a class with a generated invitation code."""
    fields = payload.model_dump(exclude_unset=True, exclude={"teacher_id"})
    created = _container(request).class_service.create_class(
        payload.teacher_id, fields
    )
    return {"success": True, "class": serialize_class(created)}


@router.put("/teacher/classes/{class_id}")
async def update_class(
    class_id: str, payload: ClassMetadataPayload, request: Request
) -> dict[str, object]:
    """Edit class metadata."""
    updated = _container(request).class_service.update_class(
        class_id, payload.model_dump(exclude_unset=True)
    )
    return {
        "success": True,
        "message": "Class updated successfully",
        "class_id": updated.id,
    }


@router.delete("/teacher/classes/{class_id}")
async def delete_class(
    class_id: str, request: Request, teacher_id: str | None = None
) -> dict[str, object]:
    """Delete a class."""
    deleted = _container(request).class_service.delete_class(class_id, teacher_id)
    return {
        "success": True,
        "message": "Class deleted successfully",
        "class_id": deleted.id,
    }


@router.delete("/teacher/classes/{class_id}/students")
async def remove_student(
    class_id: str, payload: StudentRequest, request: Request
) -> dict[str, object]:
    """Remove a student from a class roster."""
    _container(request).roster_service.remove_member(class_id, payload.student_id)
    return {"success": True, "message": "Student removed from class successfully"}
