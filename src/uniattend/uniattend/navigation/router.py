from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.enums import Role
from .permissions import DashboardVariant, Destination, can_access, dashboard_for


class Screen(str, Enum):
    DASHBOARD_ADMIN = "dashboard_admin"
    DASHBOARD_HEAD = "dashboard_head"
    DASHBOARD_HR = "dashboard_hr"
    DASHBOARD_CLASS_MONITOR = "dashboard_class_monitor"
    DASHBOARD_EMPLOYEE = "dashboard_employee"
    DASHBOARD_WELCOME = "dashboard_welcome"
    USER_MANAGEMENT = "user_management"
    ACADEMIC_CLASS = "academic_class"
    ACADEMIC_SCHEDULE = "academic_schedule"
    CONFIG_DEPARTMENT = "config_department"
    CONFIG_MAJOR = "config_major"
    CONFIG_SUBJECT = "config_subject"
    LEAVE_REVIEW = "leave_review"
    LEAVE_REQUEST = "leave_request"
    ATTENDANCE_DEPARTMENT = "attendance_department"
    ATTENDANCE_OWN = "attendance_own"
    CHECK_ATTENDANCE = "check_attendance"
    NO_ACCESS = "no_access"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Resolution:
    screen: Screen
    destination: Optional[Destination] = None

    @property
    def allowed(self) -> bool:
        return self.screen not in (Screen.NO_ACCESS, Screen.NOT_FOUND)


DASHBOARD_SCREENS = {
    DashboardVariant.ADMIN: Screen.DASHBOARD_ADMIN,
    DashboardVariant.HEAD: Screen.DASHBOARD_HEAD,
    DashboardVariant.HR: Screen.DASHBOARD_HR,
    DashboardVariant.CLASS_MONITOR: Screen.DASHBOARD_CLASS_MONITOR,
    DashboardVariant.EMPLOYEE: Screen.DASHBOARD_EMPLOYEE,
    DashboardVariant.WELCOME: Screen.DASHBOARD_WELCOME,
}

_SINGLE_SCREEN = {
    Destination.USER_MANAGEMENT: Screen.USER_MANAGEMENT,
    Destination.ACADEMIC_CLASS: Screen.ACADEMIC_CLASS,
    Destination.ACADEMIC_SCHEDULE: Screen.ACADEMIC_SCHEDULE,
    Destination.CONFIG_DEPARTMENT: Screen.CONFIG_DEPARTMENT,
    Destination.CONFIG_MAJOR: Screen.CONFIG_MAJOR,
    Destination.CONFIG_SUBJECT: Screen.CONFIG_SUBJECT,
    Destination.CHECK_ATTENDANCE: Screen.CHECK_ATTENDANCE,
}

_ROLE_DEPENDENT = {Destination.DASHBOARD, Destination.LEAVE_REQUESTS, Destination.ATTENDANCE}

if set(DASHBOARD_SCREENS) != set(DashboardVariant):
    raise RuntimeError("Every dashboard variant needs a screen")
if set(_SINGLE_SCREEN) | _ROLE_DEPENDENT != set(Destination):
    raise RuntimeError("Every destination needs a screen")


def _screen_for(destination: Destination, role: Role) -> Screen:
    if destination == Destination.DASHBOARD:
        return DASHBOARD_SCREENS[dashboard_for(role)]
    if destination == Destination.LEAVE_REQUESTS:
        return Screen.LEAVE_REVIEW if role == Role.HEAD else Screen.LEAVE_REQUEST
    if destination == Destination.ATTENDANCE:
        return Screen.ATTENDANCE_DEPARTMENT if role == Role.HEAD else Screen.ATTENDANCE_OWN
    return _SINGLE_SCREEN[destination]


def resolve(token: Optional[str], role: Optional[Role]) -> Resolution:
    """Map a navigation token to the screen `role` should see."""
    token = (token or "").strip().strip("/")
    if not token or token == Destination.DASHBOARD.value:
        return Resolution(DASHBOARD_SCREENS[dashboard_for(role)], Destination.DASHBOARD)

    destination = Destination.parse(token)
    if destination is None:
        return Resolution(Screen.NOT_FOUND)
    if not can_access(role, destination):
        return Resolution(Screen.NO_ACCESS, destination)
    return Resolution(_screen_for(destination, role), destination)
