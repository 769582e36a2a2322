from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from typing import Optional, Sequence

from ..auth.service import SessionUser
from ..common.validators import optional_text, require_non_empty
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import LeaveRequest, can_transition
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

REQUESTER_ROLES = frozenset({Role.TEACHER, Role.STAFF})
REVIEWER_ROLES = frozenset({Role.HEAD})

STATUS_CSS = {
    LeaveStatus.PENDING: "bg-warning text-dark",
    LeaveStatus.APPROVED: "bg-success",
    LeaveStatus.REJECTED: "bg-danger",
    LeaveStatus.CANCELLED: "bg-secondary",
}


class LeaveService:
    """Leave request workflow: submit -> pending -> approved | rejected | cancelled."""

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def submit(self, *, requester: SessionUser, from_date: date, to_date: date, reason: str) -> int:
        if requester.role not in REQUESTER_ROLES:
            raise AuthorizationError("Only teachers and staff can request leave")
        if to_date < from_date:
            raise ValidationError("End date must be on or after start date")

        request_id = self._leaves.create(
            user_id=requester.id,
            from_date=from_date,
            to_date=to_date,
            reason=require_non_empty(reason, "Reason"),
        )
        logger.info("Leave request %s submitted by %s", request_id, requester.unique_id)
        return request_id

    def _reviewable(self, reviewer: SessionUser, request_id: int, target: LeaveStatus) -> LeaveRequest:
        if reviewer.role not in REVIEWER_ROLES:
            raise AuthorizationError("You do not have permission to review leave requests")

        req = self._leaves.get_by_id(int(request_id))
        if not req:
            raise ValidationError("Leave request not found")
        if reviewer.department_id and req.requester_department_id != reviewer.department_id:
            raise AuthorizationError("This request belongs to another department")
        if not can_transition(req.status, target):
            raise ValidationError("Leave request has already been processed")
        return req

    def _decide(self, reviewer: SessionUser, request_id: int, status: LeaveStatus, comments: Optional[str]) -> LeaveRequest:
        ok = self._leaves.decide(
            request_id=int(request_id),
            status=status,
            reviewer_id=reviewer.id,
            comments=comments,
        )
        if not ok:
            raise ValidationError("Leave request has already been processed")
        logger.info("Leave request %s %s by %s", request_id, status.value, reviewer.unique_id)
        return self._leaves.get_by_id(int(request_id))

    def approve(self, *, reviewer: SessionUser, request_id: int, comments: Optional[str] = None) -> LeaveRequest:
        self._reviewable(reviewer, request_id, LeaveStatus.APPROVED)
        return self._decide(reviewer, request_id, LeaveStatus.APPROVED, optional_text(comments))

    def reject(self, *, reviewer: SessionUser, request_id: int, comments: Optional[str] = None) -> Optional[LeaveRequest]:
        """Reject with a mandatory reason.

        Without comments nothing is changed and None is returned, so the caller
        can prompt for a reason again.
        """
        self._reviewable(reviewer, request_id, LeaveStatus.REJECTED)
        comments = optional_text(comments)
        if comments is None:
            return None
        return self._decide(reviewer, request_id, LeaveStatus.REJECTED, comments)

    def cancel(self, *, requester: SessionUser, request_id: int) -> LeaveRequest:
        req = self._leaves.get_by_id(int(request_id))
        if not req:
            raise ValidationError("Leave request not found")
        if req.user_id != requester.id:
            raise AuthorizationError("Only the requester can cancel this request")
        if not can_transition(req.status, LeaveStatus.CANCELLED):
            raise ValidationError("Only pending requests can be cancelled")
        if not self._leaves.cancel(request_id=req.id, user_id=requester.id):
            raise ValidationError("Only pending requests can be cancelled")
        logger.info("Leave request %s cancelled by %s", req.id, requester.unique_id)
        return self._leaves.get_by_id(req.id)

    def list_by_requester(self, user_id: int) -> Sequence[LeaveRequest]:
        return self._leaves.list_by_user(int(user_id))

    def list_pending_for_department(self, department_id: int) -> Sequence[LeaveRequest]:
        return self._leaves.list_by_department(int(department_id), status=LeaveStatus.PENDING)

    def list_pending(self) -> Sequence[LeaveRequest]:
        return self._leaves.list_by_status(LeaveStatus.PENDING)

    def pending_for_reviewer(self, reviewer: SessionUser) -> Sequence[LeaveRequest]:
        """Department-scoped for reviewers with a department, global otherwise."""
        if reviewer.department_id:
            return self.list_pending_for_department(reviewer.department_id)
        return self.list_pending()

    def status_counts(self, requests: Sequence[LeaveRequest]) -> dict[str, int]:
        counts = Counter(r.status for r in requests)
        return {s.value: counts.get(s, 0) for s in LeaveStatus}

    def department_requests(self, department_id: Optional[int]) -> Sequence[LeaveRequest]:
        if department_id:
            return self._leaves.list_by_department(int(department_id))
        return [r for s in LeaveStatus for r in self._leaves.list_by_status(s)]

    def to_ui(self, req: LeaveRequest) -> dict:
        return {
            "id": req.id,
            "user_id": req.user_id,
            "name": req.requester_name or "",
            "from_date": req.from_date.strftime("%Y-%m-%d"),
            "to_date": req.to_date.strftime("%Y-%m-%d"),
            "days": req.days,
            "reason": req.reason,
            "status": req.status.value,
            "is_pending": req.status == LeaveStatus.PENDING,
            "comments": req.comments or "",
            "reviewed_at": req.reviewed_at.strftime("%Y-%m-%d %H:%M") if req.reviewed_at else "",
            "created_at": req.created_at.strftime("%Y-%m-%d %H:%M") if req.created_at else "",
            "css_class": STATUS_CSS.get(req.status, "bg-secondary"),
        }
