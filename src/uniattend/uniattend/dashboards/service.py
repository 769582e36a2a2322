from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..academics.service import AcademicService
from ..attendance.service import AttendanceService, MARKING_SCOPE, summarize
from ..auth.service import SessionUser
from ..configuration.service import ConfigurationService
from ..core.constants import RECENT_ITEMS_LIMIT
from ..core.enums import LeaveStatus
from ..leaves.service import LeaveService
from ..navigation.permissions import DashboardVariant, dashboard_for
from ..users.service import UserService


class DashboardService:
    """Collects the figures shown on each role's landing page."""

    def __init__(
        self,
        users: UserService,
        configuration: ConfigurationService,
        academics: AcademicService,
        attendance: AttendanceService,
        leaves: LeaveService,
    ):
        self._users = users
        self._configuration = configuration
        self._academics = academics
        self._attendance = attendance
        self._leaves = leaves

    def build(self, user: SessionUser, today: date) -> dict[str, Any]:
        variant = dashboard_for(user.role)
        data: dict[str, Any] = {"variant": variant.value, "user": user, "today": today.isoformat()}

        if variant == DashboardVariant.ADMIN:
            data.update(self._admin())
        elif variant == DashboardVariant.HEAD:
            data.update(self._head(user, today))
        elif variant in (DashboardVariant.HR, DashboardVariant.CLASS_MONITOR):
            data.update(self._marker(user, today))
        elif variant == DashboardVariant.EMPLOYEE:
            data.update(self._employee(user))
        return data

    def _admin(self) -> dict[str, Any]:
        return {
            "total_users": self._users.count(),
            "total_departments": len(self._configuration.list_departments()),
            "total_majors": len(self._configuration.list_majors()),
            "total_classes": len(self._academics.list_classes()),
        }

    def _head(self, user: SessionUser, today: date) -> dict[str, Any]:
        requests = self._leaves.department_requests(user.department_id)
        counts = self._leaves.status_counts(requests)

        members = self._department_members(user.department_id)
        todays = [r for r in self._attendance.list_by_date(today) if r.user_id in members]
        summary = summarize(todays, expected=len(members))

        pending = [r for r in requests if r.status == LeaveStatus.PENDING]
        return {
            "pending_leaves": counts[LeaveStatus.PENDING.value],
            "approved_leaves": counts[LeaveStatus.APPROVED.value],
            "rejected_leaves": counts[LeaveStatus.REJECTED.value],
            "department_size": len(members),
            "today_summary": summary,
            "pending_requests": [self._leaves.to_ui(r) for r in pending],
        }

    def _department_members(self, department_id: Optional[int]) -> dict[int, str]:
        if not department_id:
            return {}
        return {u.id: u.name for u in self._users.list_by_department(department_id)}

    def _marker(self, user: SessionUser, today: date) -> dict[str, Any]:
        roll = self._attendance.roll_call(marker_role=user.role, day=today)
        total = len(roll.entries)
        return {
            "target_role": MARKING_SCOPE[user.role].label,
            "total_targets": total,
            "today_summary": roll.summary,
            "attendance_rate": roll.summary.rate(total),
            "today_rows": [e for e in roll.entries if e.status is not None],
        }

    def _employee(self, user: SessionUser) -> dict[str, Any]:
        records = self._attendance.list_own(user.id)
        requests = self._leaves.list_by_requester(user.id)
        counts = self._leaves.status_counts(requests)
        summary = summarize(records)
        return {
            "summary": summary,
            "attendance_rate": summary.rate(),
            "pending_leaves": counts[LeaveStatus.PENDING.value],
            "approved_leaves": counts[LeaveStatus.APPROVED.value],
            "recent_attendance": [self._attendance.to_ui(r) for r in records[:RECENT_ITEMS_LIMIT]],
            "recent_leaves": [self._leaves.to_ui(r) for r in requests[:RECENT_ITEMS_LIMIT]],
        }
