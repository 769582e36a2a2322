from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(self, *, user_id: int, from_date: date, to_date: date, reason: str) -> int:
        """Insert a pending request; returns its id."""

        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_by_user(self, user_id: int) -> Sequence[LeaveRequest]:
        """Newest first."""

        raise NotImplementedError

    def list_by_department(
        self,
        department_id: int,
        *,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        """Requests of users in the department, newest first."""

        raise NotImplementedError

    def list_by_status(self, status: LeaveStatus) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        reviewer_id: int,
        comments: Optional[str] = None,
    ) -> bool:
        """Apply approve/reject to a pending request; False if it is no longer pending."""

        raise NotImplementedError

    def cancel(self, *, request_id: int, user_id: int) -> bool:
        """Cancel a pending request owned by `user_id`."""

        raise NotImplementedError
