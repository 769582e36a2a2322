from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """User roles used for navigation and permission checks."""

    ADMIN = "admin"
    HEAD = "head"
    HR_ASSISTANT = "hr_assistant"
    CLASS_MODERATOR = "class_moderator"
    TEACHER = "teacher"
    STAFF = "staff"

    @classmethod
    def parse(cls, value: object) -> Optional["Role"]:
        """Return the matching role, or None for unknown values."""
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def label(self) -> str:
        return _ROLE_LABELS[self]


_ROLE_LABELS = {
    Role.ADMIN: "Administrator",
    Role.HEAD: "Head of Department",
    Role.HR_ASSISTANT: "HR Assistant",
    Role.CLASS_MODERATOR: "Class Moderator",
    Role.TEACHER: "Teacher",
    Role.STAFF: "Staff",
}


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    BANNED = "banned"
    PENDING = "pending"
    SUSPENDED = "suspended"


class AttendanceStatus(str, Enum):
    """Daily attendance status. A missing row means "unmarked"."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class LeaveStatus(str, Enum):
    """Leave request workflow status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @property
    def index(self) -> int:
        return list(Weekday).index(self)
