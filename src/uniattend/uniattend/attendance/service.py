from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.validators import optional_text
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.repository import UserRepository
from .model import AttendanceRecord, AttendanceSummary, RollCall, RollCallEntry
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

# Marker role -> role of the users it marks.
MARKING_SCOPE = {
    Role.HR_ASSISTANT: Role.STAFF,
    Role.CLASS_MODERATOR: Role.TEACHER,
}

STATUS_CSS = {
    AttendanceStatus.PRESENT: "bg-success",
    AttendanceStatus.ABSENT: "bg-danger",
    AttendanceStatus.LATE: "bg-warning text-dark",
    AttendanceStatus.EXCUSED: "bg-info text-dark",
}


def target_role_for(marker_role: Optional[Role]) -> Role:
    target = MARKING_SCOPE.get(marker_role) if marker_role else None
    if target is None:
        raise AuthorizationError("You do not have permission to mark attendance")
    return target


def summarize(records: Iterable[AttendanceRecord], *, expected: int = 0) -> AttendanceSummary:
    """Count records per status; `expected` users without a record count as unmarked."""
    counts = {s: 0 for s in AttendanceStatus}
    for r in records:
        counts[r.status] += 1
    marked = sum(counts.values())
    return AttendanceSummary(
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        late=counts[AttendanceStatus.LATE],
        excused=counts[AttendanceStatus.EXCUSED],
        unmarked=max(expected - marked, 0),
    )


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def mark_attendance(
        self,
        *,
        marker_role: Optional[Role],
        target_user_id: int,
        day: date,
        status: object,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        """Record `status` for (target, day); re-marking the same pair updates it in place."""
        target_role = target_role_for(marker_role)

        try:
            status = status if isinstance(status, AttendanceStatus) else AttendanceStatus(status)
        except ValueError:
            raise ValidationError("Invalid attendance status")

        target = self._users.get_by_id(int(target_user_id))
        if not target or not target.is_active:
            raise ValidationError("User not found")
        if target.role != target_role:
            raise AuthorizationError(f"You can only mark attendance for {target_role.label} users")

        record = self._attendance.upsert(
            user_id=target.id,
            day=day,
            status=status,
            notes=optional_text(notes),
        )
        logger.info("Attendance %s marked %s for user %s", day.isoformat(), status.value, target.unique_id)
        return record

    def list_own(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        if start and end and end < start:
            raise ValidationError("End date must be on or after start date")
        return self._attendance.list_for_user(int(user_id), start=start, end=end)

    def list_department(self, department_id: int) -> list[AttendanceRecord]:
        """Records of every active user in the department, newest first."""
        records: list[AttendanceRecord] = []
        for user in self._users.list_active_by_department(int(department_id)):
            records.extend(self._attendance.list_for_user(user.id))
        records.sort(key=lambda r: (r.date, r.user_id), reverse=True)
        return records

    def list_by_date(self, day: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_by_date(day)

    def roll_call(self, *, marker_role: Optional[Role], day: date) -> RollCall:
        target_role = target_role_for(marker_role)
        targets = self._users.list_active_by_role(target_role)
        marks = {r.user_id: r for r in self._attendance.list_by_date(day)}

        entries = []
        for user in targets:
            mark = marks.get(user.id)
            entries.append(
                RollCallEntry(
                    user_id=user.id,
                    unique_id=user.unique_id,
                    name=user.name,
                    status=mark.status if mark else None,
                    notes=mark.notes if mark else None,
                )
            )

        target_ids = {u.id for u in targets}
        summary = summarize((r for uid, r in marks.items() if uid in target_ids), expected=len(targets))
        return RollCall(date=day, entries=entries, summary=summary)

    def to_ui(self, record: AttendanceRecord, *, names: Optional[dict[int, str]] = None) -> dict:
        return {
            "id": record.id,
            "user_id": record.user_id,
            "name": (names or {}).get(record.user_id, ""),
            "date": record.date.strftime("%Y-%m-%d"),
            "status": record.status.value,
            "notes": record.notes or "",
            "css_class": STATUS_CSS.get(record.status, "bg-secondary"),
        }
