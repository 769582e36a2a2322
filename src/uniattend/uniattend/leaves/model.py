from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus

# pending is the only state with outgoing transitions; the rest are terminal.
LEAVE_TRANSITIONS: dict[LeaveStatus, frozenset[LeaveStatus]] = {
    LeaveStatus.PENDING: frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED, LeaveStatus.CANCELLED}),
    LeaveStatus.APPROVED: frozenset(),
    LeaveStatus.REJECTED: frozenset(),
    LeaveStatus.CANCELLED: frozenset(),
}


def can_transition(current: LeaveStatus, target: LeaveStatus) -> bool:
    return target in LEAVE_TRANSITIONS[current]


@dataclass(frozen=True)
class LeaveRequest:
    id: int
    user_id: int
    from_date: date
    to_date: date
    reason: str
    status: LeaveStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    reviewer_id: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    comments: Optional[str] = None
    # joined from users for display and department scoping
    requester_name: Optional[str] = None
    requester_department_id: Optional[int] = None

    @property
    def days(self) -> int:
        return (self.to_date - self.from_date).days + 1

    @property
    def is_terminal(self) -> bool:
        return not LEAVE_TRANSITIONS[self.status]
