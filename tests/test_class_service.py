"""Tests for class lifecycle services."""

import re

import pytest

from attendly.containers import AppContainer
from attendly.domain.errors import BadInputError, InternalError, NotFoundError
from attendly.services import classes
from attendly.services.classes import generate_class_code
from tests.conftest import InMemoryBackend, class_row


def _create(container: AppContainer, **fields: object):
    payload: dict[str, object] = {
        "class_name": "Intro to Computing",
        "subject": "CS",
        "section": "A",
    }
    payload.update(fields)
    return container.class_service.create_class("teacher-1", payload)


def test_generate_class_code_sanitizes_subject_and_section() -> None:
    code = generate_class_code("Data Science ", "b 2")

    assert re.fullmatch(r"DATASCIENCE-B2-[A-Z2-7]{8}", code)


def test_generated_codes_differ() -> None:
    codes = {generate_class_code("CS", "A") for _ in range(50)}

    assert len(codes) == 50


def test_create_class_applies_defaults(container: AppContainer) -> None:
    created = _create(container, room="B-12")

    assert re.fullmatch(r"CS-A-[A-Z2-7]{8}", created.class_code)
    assert created.teacher_id == "teacher-1"
    assert created.room == "B-12"
    assert created.max_students == 30
    assert created.students == []
    assert created.created_at is not None
    assert created.created_at == created.updated_at


def test_create_class_requires_metadata(container: AppContainer) -> None:
    with pytest.raises(BadInputError, match="Missing required fields"):
        container.class_service.create_class("teacher-1", {"class_name": "Algo"})

    with pytest.raises(BadInputError):
        container.class_service.create_class(
            "  ", {"class_name": "Algo", "subject": "CS", "section": "A"}
        )


def test_create_class_ignores_roster_and_code_fields(container: AppContainer) -> None:
    created = _create(container, students=["intruder"], class_code="FIXED")

    assert created.students == []
    assert created.class_code != "FIXED"


def test_create_class_regenerates_colliding_codes(
    container: AppContainer, backend: InMemoryBackend, monkeypatch: pytest.MonkeyPatch
) -> None:
    backend.seed("classes", class_row(class_code="CS-A-TAKEN000"))
    codes = iter(["CS-A-TAKEN000", "CS-A-FRESH000"])
    monkeypatch.setattr(classes, "generate_class_code", lambda *_: next(codes))

    created = _create(container)

    assert created.class_code == "CS-A-FRESH000"


def test_create_class_gives_up_after_repeated_collisions(
    container: AppContainer, backend: InMemoryBackend, monkeypatch: pytest.MonkeyPatch
) -> None:
    backend.seed("classes", class_row(class_code="CS-A-TAKEN000"))
    monkeypatch.setattr(classes, "generate_class_code", lambda *_: "CS-A-TAKEN000")

    with pytest.raises(InternalError):
        _create(container)


def test_create_class_records_audit_event(
    container: AppContainer, backend: InMemoryBackend
) -> None:
    created = _create(container)

    events = list(backend.table("audit_events").values())
    assert [event["event_type"] for event in events] == ["class.created"]
    assert events[0]["entity_id"] == created.id
    assert events[0]["actor_id"] == "teacher-1"


def test_list_for_teacher_sorts_newest_first(
    container: AppContainer, backend: InMemoryBackend
) -> None:
    old = backend.seed("classes", class_row(created_at="2025-01-01T08:00:00+00:00"))
    new = backend.seed("classes", class_row(created_at="2025-03-01T08:00:00+00:00"))
    backend.seed("classes", class_row(teacher_id="teacher-2"))

    listed = container.class_service.list_for_teacher("teacher-1")

    assert [record.id for record in listed] == [new["id"], old["id"]]


def test_list_for_teacher_requires_id(container: AppContainer) -> None:
    with pytest.raises(BadInputError, match="Teacher ID is required"):
        container.class_service.list_for_teacher("")


def test_list_for_student_adds_teacher_names(
    container: AppContainer, backend: InMemoryBackend
) -> None:
    backend.upsert("user_profiles", "teacher-1", {"display_name": "Ms. Rivera"})
    named = backend.seed(
        "classes",
        class_row(students=["u1"], created_at="2025-02-01T08:00:00+00:00"),
    )
    unnamed = backend.seed(
        "classes",
        class_row(
            teacher_id="teacher-2",
            students=["u1", "u2"],
            created_at="2025-04-01T08:00:00+00:00",
        ),
    )
    backend.seed("classes", class_row(students=["u2"]))

    listed = container.class_service.list_for_student("u1")

    assert [item.record.id for item in listed] == [unnamed["id"], named["id"]]
    assert [item.teacher_name for item in listed] == ["Teacher", "Ms. Rivera"]


def test_list_for_student_without_classes(container: AppContainer) -> None:
    assert container.class_service.list_for_student("nobody") == []


def test_update_class_is_metadata_only(
    container: AppContainer, backend: InMemoryBackend
) -> None:
    seeded = backend.seed("classes", class_row(students=["u1"]))

    updated = container.class_service.update_class(
        seeded["id"],
        {
            "room": "Lab 3",
            "students": [],
            "class_code": "HIJACK",
            "teacher_id": "someone-else",
        },
    )

    assert updated.room == "Lab 3"
    assert updated.students == ["u1"]
    assert updated.class_code == "CS-A-SEEDED01"
    assert updated.teacher_id == "teacher-1"
    assert updated.updated_at is not None
    assert updated.updated_at > updated.created_at


def test_update_missing_class(container: AppContainer) -> None:
    with pytest.raises(NotFoundError, match="Class not found"):
        container.class_service.update_class("missing", {"room": "1"})

    with pytest.raises(BadInputError, match="Class ID is required"):
        container.class_service.update_class("", {"room": "1"})


def test_delete_class_keeps_roster_in_audit_trail(
    container: AppContainer, backend: InMemoryBackend
) -> None:
    seeded = backend.seed("classes", class_row(students=["u1", "u2"]))

    container.class_service.delete_class(seeded["id"])

    assert backend.get("classes", seeded["id"]) is None
    events = list(backend.table("audit_events").values())
    assert events[-1]["event_type"] == "class.deleted"
    assert events[-1]["before_json"]["students"] == ["u1", "u2"]
    assert events[-1]["after_json"] is None


def test_delete_missing_class(container: AppContainer) -> None:
    with pytest.raises(NotFoundError):
        container.class_service.delete_class("missing")


def test_update_class_skips_null_fields(
    container: AppContainer, backend: InMemoryBackend
) -> None:
    seeded = backend.seed("classes", class_row(room="Lab 1", max_students=25))

    updated = container.class_service.update_class(
        seeded["id"], {"room": None, "max_students": None, "description": "Labs"}
    )

    assert updated.room == "Lab 1"
    assert updated.max_students == 25
    assert updated.description == "Labs"


def test_update_class_rejects_blank_required_field(
    container: AppContainer, backend: InMemoryBackend
) -> None:
    seeded = backend.seed("classes", class_row())

    with pytest.raises(BadInputError, match="class_name"):
        container.class_service.update_class(seeded["id"], {"class_name": "  "})

    assert backend.get("classes", seeded["id"])["class_name"] == seeded["class_name"]


def test_delete_class_records_given_actor(
    container: AppContainer, backend: InMemoryBackend
) -> None:
    seeded = backend.seed("classes", class_row())

    container.class_service.delete_class(seeded["id"], "admin-1")

    events = list(backend.table("audit_events").values())
    assert events[-1]["event_type"] == "class.deleted"
    assert events[-1]["actor_id"] == "admin-1"


def test_delete_class_defaults_actor_to_owner(
    container: AppContainer, backend: InMemoryBackend
) -> None:
    seeded = backend.seed("classes", class_row())

    container.class_service.delete_class(seeded["id"])

    events = list(backend.table("audit_events").values())
    assert events[-1]["actor_id"] == seeded["teacher_id"]
