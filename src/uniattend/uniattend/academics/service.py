from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional, Sequence

from ..common.datetime_utils import parse_hhmm
from ..common.validators import optional_text, require_int_range, require_non_empty
from ..configuration.repository import MajorRepository, SubjectRepository
from ..core.enums import Role, Weekday
from ..core.exceptions import AuthorizationError, ValidationError
from .model import AcademicClass, Schedule
from .repository import ClassRepository, ScheduleRepository


@dataclass(frozen=True)
class ClassForm:
    name: str
    major_id: object
    year: object
    semester: object
    academic_year: str
    group: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class ScheduleForm:
    class_id: object
    subject_id: object
    day_of_week: str
    start_time: str
    end_time: str
    academic_year: str
    semester: object
    room: Optional[str] = None


def _parse_time(value: object, field_name: str) -> time:
    if isinstance(value, time):
        return value
    try:
        return parse_hhmm(str(value or ""))
    except ValueError:
        raise ValidationError(f"{field_name} must be a time (HH:MM)")


class AcademicService:
    """Use case: maintain classes and their weekly timetable (admin only)."""

    def __init__(
        self,
        classes: ClassRepository,
        schedules: ScheduleRepository,
        majors: MajorRepository,
        subjects: SubjectRepository,
    ):
        self._classes = classes
        self._schedules = schedules
        self._majors = majors
        self._subjects = subjects

    @staticmethod
    def _require_admin(current_role: Optional[Role]) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to change academic setup")

    # -------- Classes --------
    def list_classes(self) -> Sequence[AcademicClass]:
        return self._classes.list_all()

    def get_class(self, class_id: int) -> Optional[AcademicClass]:
        return self._classes.get_by_id(int(class_id))

    def list_active_classes_by_major(self, major_id: int) -> Sequence[AcademicClass]:
        return self._classes.list_active_by_major(int(major_id))

    def _validated_class(self, form: ClassForm) -> dict:
        major_id = require_int_range(form.major_id, "Major", low=1)
        if not self._majors.get_by_id(major_id):
            raise ValidationError("Major does not exist")
        return dict(
            name=require_non_empty(form.name, "Class name"),
            major_id=major_id,
            year=require_int_range(form.year, "Year", low=1),
            semester=require_int_range(form.semester, "Semester", low=1, high=2),
            academic_year=require_non_empty(form.academic_year, "Academic year"),
            group=(form.group or "").strip(),
            is_active=bool(form.is_active),
        )

    def create_class(self, *, current_role: Optional[Role], form: ClassForm) -> int:
        self._require_admin(current_role)
        return self._classes.create(**self._validated_class(form))

    def update_class(self, *, current_role: Optional[Role], class_id: int, form: ClassForm) -> None:
        self._require_admin(current_role)
        if not self._classes.update(int(class_id), **self._validated_class(form)):
            raise ValidationError("Class not found")

    def delete_class(self, *, current_role: Optional[Role], class_id: int) -> None:
        self._require_admin(current_role)
        if self._schedules.count_by_class(int(class_id)):
            raise ValidationError("Class still has schedules")
        if not self._classes.delete(int(class_id)):
            raise ValidationError("Class not found")

    # -------- Schedules --------
    def list_schedules(self, *, class_id: Optional[int] = None) -> Sequence[Schedule]:
        if class_id:
            return self._schedules.list_by_class(int(class_id))
        return self._schedules.list_all()

    def get_schedule(self, schedule_id: int) -> Optional[Schedule]:
        return self._schedules.get_by_id(int(schedule_id))

    def _validated_schedule(self, form: ScheduleForm) -> dict:
        class_id = require_int_range(form.class_id, "Class", low=1)
        subject_id = require_int_range(form.subject_id, "Subject", low=1)
        if not self._classes.get_by_id(class_id):
            raise ValidationError("Class does not exist")
        if not self._subjects.get_by_id(subject_id):
            raise ValidationError("Subject does not exist")

        try:
            day = Weekday(form.day_of_week)
        except ValueError:
            raise ValidationError("Invalid day of week")

        start = _parse_time(form.start_time, "Start time")
        end = _parse_time(form.end_time, "End time")
        if end <= start:
            raise ValidationError("End time must be after start time")

        return dict(
            class_id=class_id,
            subject_id=subject_id,
            room=optional_text(form.room),
            day_of_week=day,
            start_time=start,
            end_time=end,
            academic_year=require_non_empty(form.academic_year, "Academic year"),
            semester=require_int_range(form.semester, "Semester", low=1, high=2),
        )

    def create_schedule(self, *, current_role: Optional[Role], form: ScheduleForm) -> int:
        self._require_admin(current_role)
        return self._schedules.create(**self._validated_schedule(form))

    def update_schedule(self, *, current_role: Optional[Role], schedule_id: int, form: ScheduleForm) -> None:
        self._require_admin(current_role)
        if not self._schedules.update(int(schedule_id), **self._validated_schedule(form)):
            raise ValidationError("Schedule not found")

    def delete_schedule(self, *, current_role: Optional[Role], schedule_id: int) -> None:
        self._require_admin(current_role)
        if not self._schedules.delete(int(schedule_id)):
            raise ValidationError("Schedule not found")
