from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark per (user_id, date)."""

    id: int
    user_id: int
    date: date
    status: AttendanceStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceSummary:
    present: int = 0
    absent: int = 0
    late: int = 0
    excused: int = 0
    unmarked: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent + self.late + self.excused

    def rate(self, base: Optional[int] = None) -> int:
        """Present share in percent of `base` (defaults to marked total)."""
        base = self.total if base is None else base
        return round(self.present / base * 100) if base > 0 else 0


@dataclass(frozen=True)
class RollCallEntry:
    """A user a marker is responsible for, with the mark for the day (if any)."""

    user_id: int
    unique_id: str
    name: str
    status: Optional[AttendanceStatus] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class RollCall:
    date: date
    entries: list[RollCallEntry] = field(default_factory=list)
    summary: AttendanceSummary = field(default_factory=AttendanceSummary)
