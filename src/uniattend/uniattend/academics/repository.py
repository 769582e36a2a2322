from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from ..core.enums import Weekday
from .model import AcademicClass, Schedule


class ClassRepository(Protocol):
    def list_all(self) -> Sequence[AcademicClass]:
        """Ordered by name, with the major name joined in."""

        raise NotImplementedError

    def list_active_by_major(self, major_id: int) -> Sequence[AcademicClass]:
        raise NotImplementedError

    def count_by_major(self, major_id: int) -> int:
        """Active and inactive classes alike."""

        raise NotImplementedError

    def get_by_id(self, class_id: int) -> Optional[AcademicClass]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        major_id: int,
        year: int,
        semester: int,
        academic_year: str,
        group: str,
        is_active: bool,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        class_id: int,
        *,
        name: str,
        major_id: int,
        year: int,
        semester: int,
        academic_year: str,
        group: str,
        is_active: bool,
    ) -> bool:
        raise NotImplementedError

    def delete(self, class_id: int) -> bool:
        raise NotImplementedError


class ScheduleRepository(Protocol):
    def list_all(self) -> Sequence[Schedule]:
        """Joined with class/subject labels."""

        raise NotImplementedError

    def list_by_class(self, class_id: int) -> Sequence[Schedule]:
        raise NotImplementedError

    def count_by_class(self, class_id: int) -> int:
        raise NotImplementedError

    def count_by_subject(self, subject_id: int) -> int:
        raise NotImplementedError

    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        raise NotImplementedError

    def create(
        self,
        *,
        class_id: int,
        subject_id: int,
        room: Optional[str],
        day_of_week: Weekday,
        start_time: time,
        end_time: time,
        academic_year: str,
        semester: int,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        schedule_id: int,
        *,
        class_id: int,
        subject_id: int,
        room: Optional[str],
        day_of_week: Weekday,
        start_time: time,
        end_time: time,
        academic_year: str,
        semester: int,
    ) -> bool:
        raise NotImplementedError

    def delete(self, schedule_id: int) -> bool:
        raise NotImplementedError
