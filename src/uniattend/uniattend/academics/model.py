from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ..core.enums import Weekday


@dataclass(frozen=True)
class AcademicClass:
    """A class (cohort) of students inside a major."""

    id: int
    name: str
    major_id: int
    year: int
    semester: int
    academic_year: str
    group: str
    is_active: bool = True
    major_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Schedule:
    id: int
    class_id: int
    subject_id: int
    room: Optional[str]
    day_of_week: Weekday
    start_time: time
    end_time: time
    academic_year: str
    semester: int
    class_name: Optional[str] = None
    subject_name: Optional[str] = None
    subject_code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
