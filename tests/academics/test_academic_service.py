from datetime import time

import pytest

from src.uniattend.uniattend.academics.service import ClassForm, ScheduleForm
from src.uniattend.uniattend.core.enums import Role, Weekday
from src.uniattend.uniattend.core.exceptions import AuthorizationError, ValidationError


@pytest.fixture
def svc(container):
    return container.academic_service


@pytest.fixture
def major_id(store):
    return store.majors.create(name="Software Engineering", short_name="SE", department_id=store.cs_id)


@pytest.fixture
def subject_id(store):
    return store.subjects.create(name="Databases", code="CS201", credits=3)


def _class_form(major_id, **overrides):
    fields = dict(name="SE-2A", major_id=major_id, year="2", semester="1", academic_year="2025-2026", group="A")
    fields.update(overrides)
    return ClassForm(**fields)


def _schedule_form(class_id, subject_id, **overrides):
    fields = dict(
        class_id=str(class_id),
        subject_id=str(subject_id),
        day_of_week="Tuesday",
        start_time="09:00",
        end_time="10:30",
        academic_year="2025-2026",
        semester="1",
        room=" B201 ",
    )
    fields.update(overrides)
    return ScheduleForm(**fields)


def test_create_class(svc, major_id):
    class_id = svc.create_class(current_role=Role.ADMIN, form=_class_form(major_id))
    cls = svc.get_class(class_id)
    assert cls.name == "SE-2A"
    assert cls.year == 2
    assert cls.is_active
    assert [c.id for c in svc.list_active_classes_by_major(major_id)] == [class_id]


@pytest.mark.parametrize(
    "overrides",
    [{"year": "0"}, {"semester": "3"}, {"name": ""}, {"academic_year": " "}],
)
def test_invalid_class_forms(svc, major_id, overrides):
    with pytest.raises(ValidationError):
        svc.create_class(current_role=Role.ADMIN, form=_class_form(major_id, **overrides))


def test_class_requires_existing_major(svc):
    with pytest.raises(ValidationError, match="Major does not exist"):
        svc.create_class(current_role=Role.ADMIN, form=_class_form("999"))


def test_class_changes_require_admin(svc, major_id):
    with pytest.raises(AuthorizationError):
        svc.create_class(current_role=Role.TEACHER, form=_class_form(major_id))


def test_create_schedule_parses_fields(svc, major_id, subject_id):
    class_id = svc.create_class(current_role=Role.ADMIN, form=_class_form(major_id))
    sid = svc.create_schedule(current_role=Role.ADMIN, form=_schedule_form(class_id, subject_id))

    schedule = svc.get_schedule(sid)
    assert schedule.day_of_week == Weekday.TUESDAY
    assert schedule.start_time == time(9, 0)
    assert schedule.end_time == time(10, 30)
    assert schedule.room == "B201"
    assert [s.id for s in svc.list_schedules(class_id=class_id)] == [sid]


def test_schedules_are_ordered_by_weekday_then_start(svc, major_id, subject_id):
    class_id = svc.create_class(current_role=Role.ADMIN, form=_class_form(major_id))
    late = svc.create_schedule(
        current_role=Role.ADMIN, form=_schedule_form(class_id, subject_id, day_of_week="Monday", start_time="13:00", end_time="14:00")
    )
    early = svc.create_schedule(
        current_role=Role.ADMIN, form=_schedule_form(class_id, subject_id, day_of_week="Monday", start_time="08:00", end_time="09:00")
    )
    friday = svc.create_schedule(current_role=Role.ADMIN, form=_schedule_form(class_id, subject_id, day_of_week="Friday"))

    assert [s.id for s in svc.list_schedules()] == [early, late, friday]


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"end_time": "09:00"}, "End time must be after start time"),
        ({"end_time": "08:00"}, "End time must be after start time"),
        ({"start_time": "9am"}, "Start time must be a time"),
        ({"day_of_week": "Someday"}, "Invalid day of week"),
        ({"semester": "5"}, "Semester must be between 1 and 2"),
    ],
)
def test_invalid_schedule_forms(svc, major_id, subject_id, overrides, message):
    class_id = svc.create_class(current_role=Role.ADMIN, form=_class_form(major_id))
    with pytest.raises(ValidationError, match=message):
        svc.create_schedule(current_role=Role.ADMIN, form=_schedule_form(class_id, subject_id, **overrides))


def test_schedule_requires_existing_class_and_subject(svc, subject_id):
    with pytest.raises(ValidationError, match="Class does not exist"):
        svc.create_schedule(current_role=Role.ADMIN, form=_schedule_form(42, subject_id))


def test_class_with_schedules_cannot_be_deleted(svc, major_id, subject_id):
    class_id = svc.create_class(current_role=Role.ADMIN, form=_class_form(major_id))
    sid = svc.create_schedule(current_role=Role.ADMIN, form=_schedule_form(class_id, subject_id))

    with pytest.raises(ValidationError, match="Class still has schedules"):
        svc.delete_class(current_role=Role.ADMIN, class_id=class_id)

    svc.delete_schedule(current_role=Role.ADMIN, schedule_id=sid)
    svc.delete_class(current_role=Role.ADMIN, class_id=class_id)
    assert svc.get_class(class_id) is None
