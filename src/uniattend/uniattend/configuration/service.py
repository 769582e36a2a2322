from __future__ import annotations

from typing import Optional, Sequence

from ..academics.repository import ClassRepository, ScheduleRepository
from ..common.validators import require_int_range, require_non_empty
from ..core.constants import MAX_SUBJECT_CREDITS, MIN_SUBJECT_CREDITS
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Department, Major, Subject
from .repository import DepartmentRepository, MajorRepository, SubjectRepository


class ConfigurationService:
    """Use case: maintain departments, majors and subjects (admin only)."""

    def __init__(
        self,
        departments: DepartmentRepository,
        majors: MajorRepository,
        subjects: SubjectRepository,
        classes: ClassRepository,
        schedules: ScheduleRepository,
    ):
        self._departments = departments
        self._majors = majors
        self._subjects = subjects
        self._classes = classes
        self._schedules = schedules

    @staticmethod
    def _require_admin(current_role: Optional[Role]) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to change configuration")

    # -------- Departments --------
    def list_departments(self) -> Sequence[Department]:
        return self._departments.list_all()

    def get_department(self, department_id: int) -> Optional[Department]:
        return self._departments.get_by_id(int(department_id))

    def create_department(self, *, current_role: Optional[Role], name: str, short_name: str) -> int:
        self._require_admin(current_role)
        return self._departments.create(
            name=require_non_empty(name, "Department name"),
            short_name=require_non_empty(short_name, "Short name"),
        )

    def update_department(self, *, current_role: Optional[Role], department_id: int, name: str, short_name: str) -> None:
        self._require_admin(current_role)
        ok = self._departments.update(
            int(department_id),
            name=require_non_empty(name, "Department name"),
            short_name=require_non_empty(short_name, "Short name"),
        )
        if not ok:
            raise ValidationError("Department not found")

    def delete_department(self, *, current_role: Optional[Role], department_id: int) -> None:
        self._require_admin(current_role)
        if self._majors.list_by_department(int(department_id)):
            raise ValidationError("Department still has majors")
        if not self._departments.delete(int(department_id)):
            raise ValidationError("Department not found")

    # -------- Majors --------
    def list_majors(self, *, department_id: Optional[int] = None) -> Sequence[Major]:
        if department_id:
            return self._majors.list_by_department(int(department_id))
        return self._majors.list_all()

    def get_major(self, major_id: int) -> Optional[Major]:
        return self._majors.get_by_id(int(major_id))

    def _require_department(self, department_id: object) -> int:
        dept_id = require_int_range(department_id, "Department", low=1)
        if not self._departments.get_by_id(dept_id):
            raise ValidationError("Department does not exist")
        return dept_id

    def create_major(self, *, current_role: Optional[Role], name: str, short_name: str, department_id: object) -> int:
        self._require_admin(current_role)
        return self._majors.create(
            name=require_non_empty(name, "Major name"),
            short_name=require_non_empty(short_name, "Short name"),
            department_id=self._require_department(department_id),
        )

    def update_major(
        self,
        *,
        current_role: Optional[Role],
        major_id: int,
        name: str,
        short_name: str,
        department_id: object,
    ) -> None:
        self._require_admin(current_role)
        ok = self._majors.update(
            int(major_id),
            name=require_non_empty(name, "Major name"),
            short_name=require_non_empty(short_name, "Short name"),
            department_id=self._require_department(department_id),
        )
        if not ok:
            raise ValidationError("Major not found")

    def delete_major(self, *, current_role: Optional[Role], major_id: int) -> None:
        self._require_admin(current_role)
        if self._classes.count_by_major(int(major_id)):
            raise ValidationError("Major still has classes")
        if not self._majors.delete(int(major_id)):
            raise ValidationError("Major not found")

    # -------- Subjects --------
    def list_subjects(self) -> Sequence[Subject]:
        return self._subjects.list_all()

    def get_subject(self, subject_id: int) -> Optional[Subject]:
        return self._subjects.get_by_id(int(subject_id))

    def _validated_subject(self, name: str, code: str, credits: object, *, subject_id: Optional[int] = None):
        name = require_non_empty(name, "Subject name")
        code = require_non_empty(code, "Subject code").upper()
        credits = require_int_range(credits, "Credits", low=MIN_SUBJECT_CREDITS, high=MAX_SUBJECT_CREDITS)

        existing = self._subjects.get_by_code(code)
        if existing and existing.id != subject_id:
            raise ValidationError(f"Subject code {code} already exists")
        return name, code, credits

    def create_subject(self, *, current_role: Optional[Role], name: str, code: str, credits: object) -> int:
        self._require_admin(current_role)
        name, code, credits = self._validated_subject(name, code, credits)
        return self._subjects.create(name=name, code=code, credits=credits)

    def update_subject(
        self,
        *,
        current_role: Optional[Role],
        subject_id: int,
        name: str,
        code: str,
        credits: object,
    ) -> None:
        self._require_admin(current_role)
        name, code, credits = self._validated_subject(name, code, credits, subject_id=int(subject_id))
        if not self._subjects.update(int(subject_id), name=name, code=code, credits=credits):
            raise ValidationError("Subject not found")

    def delete_subject(self, *, current_role: Optional[Role], subject_id: int) -> None:
        self._require_admin(current_role)
        if self._schedules.count_by_subject(int(subject_id)):
            raise ValidationError("Subject is still used by schedules")
        if not self._subjects.delete(int(subject_id)):
            raise ValidationError("Subject not found")
