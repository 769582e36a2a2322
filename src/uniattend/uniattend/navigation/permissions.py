"""Role -> navigation policy.

Pure lookups: which destinations a role may open, how they are grouped in the
sidebar, and which dashboard the role lands on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..core.enums import Role


class Destination(str, Enum):
    DASHBOARD = "dashboard"
    USER_MANAGEMENT = "user-management"
    ACADEMIC_CLASS = "academic/class"
    ACADEMIC_SCHEDULE = "academic/schedule"
    CONFIG_DEPARTMENT = "configuration/department"
    CONFIG_MAJOR = "configuration/major"
    CONFIG_SUBJECT = "configuration/subject"
    LEAVE_REQUESTS = "leave-requests"
    ATTENDANCE = "attendance"
    CHECK_ATTENDANCE = "check-attendance"

    @classmethod
    def parse(cls, token: object) -> Optional["Destination"]:
        try:
            return cls(str(token).strip("/"))
        except ValueError:
            return None


class DashboardVariant(str, Enum):
    ADMIN = "admin"
    HEAD = "head"
    HR = "hr"
    CLASS_MONITOR = "class_monitor"
    EMPLOYEE = "employee"
    WELCOME = "welcome"


@dataclass(frozen=True)
class NavEntry:
    """A sidebar item: either a single destination or a titled group of them."""

    title: str
    icon: str
    destination: Optional[Destination] = None
    children: tuple["NavEntry", ...] = field(default_factory=tuple)

    @property
    def is_group(self) -> bool:
        return self.destination is None


_ALL_ROLES = frozenset(Role)
_ADMIN = frozenset({Role.ADMIN})

POLICY: dict[Destination, frozenset[Role]] = {
    Destination.DASHBOARD: _ALL_ROLES,
    Destination.USER_MANAGEMENT: _ADMIN,
    Destination.ACADEMIC_CLASS: _ADMIN,
    Destination.ACADEMIC_SCHEDULE: _ADMIN,
    Destination.CONFIG_DEPARTMENT: _ADMIN,
    Destination.CONFIG_MAJOR: _ADMIN,
    Destination.CONFIG_SUBJECT: _ADMIN,
    Destination.LEAVE_REQUESTS: frozenset({Role.HEAD, Role.TEACHER, Role.STAFF}),
    Destination.ATTENDANCE: frozenset({Role.HEAD, Role.TEACHER, Role.STAFF}),
    Destination.CHECK_ATTENDANCE: frozenset({Role.HR_ASSISTANT, Role.CLASS_MODERATOR}),
}

DASHBOARDS: dict[Role, DashboardVariant] = {
    Role.ADMIN: DashboardVariant.ADMIN,
    Role.HEAD: DashboardVariant.HEAD,
    Role.HR_ASSISTANT: DashboardVariant.HR,
    Role.CLASS_MODERATOR: DashboardVariant.CLASS_MONITOR,
    Role.TEACHER: DashboardVariant.EMPLOYEE,
    Role.STAFF: DashboardVariant.EMPLOYEE,
}

# Sidebar layout, in display order.
NAVIGATION: tuple[NavEntry, ...] = (
    NavEntry("Dashboard", "bi-speedometer2", Destination.DASHBOARD),
    NavEntry("User Management", "bi-people", Destination.USER_MANAGEMENT),
    NavEntry(
        "Academic",
        "bi-mortarboard",
        children=(
            NavEntry("Class", "bi-easel", Destination.ACADEMIC_CLASS),
            NavEntry("Schedule", "bi-calendar-week", Destination.ACADEMIC_SCHEDULE),
        ),
    ),
    NavEntry(
        "Configuration",
        "bi-gear",
        children=(
            NavEntry("Department", "bi-building", Destination.CONFIG_DEPARTMENT),
            NavEntry("Major", "bi-diagram-3", Destination.CONFIG_MAJOR),
            NavEntry("Subject", "bi-book", Destination.CONFIG_SUBJECT),
        ),
    ),
    NavEntry("Leave Requests", "bi-envelope-paper", Destination.LEAVE_REQUESTS),
    NavEntry("Attendance", "bi-calendar-check", Destination.ATTENDANCE),
    NavEntry("Check Attendance", "bi-clipboard-check", Destination.CHECK_ATTENDANCE),
)


def _flatten(entries: tuple[NavEntry, ...]) -> list[Destination]:
    out: list[Destination] = []
    for e in entries:
        if e.is_group:
            out.extend(_flatten(e.children))
        else:
            out.append(e.destination)
    return out


def _check_tables() -> None:
    missing = set(Destination) - set(POLICY)
    if missing:
        raise RuntimeError(f"Destinations without a policy: {sorted(d.value for d in missing)}")
    laid_out = _flatten(NAVIGATION)
    if sorted(laid_out) != sorted(Destination):
        raise RuntimeError("Navigation layout must list every destination exactly once")
    unmapped = set(Role) - set(DASHBOARDS)
    if unmapped:
        raise RuntimeError(f"Roles without a dashboard: {sorted(r.value for r in unmapped)}")


_check_tables()


def can_access(role: Optional[Role], destination: Destination) -> bool:
    if role is None:
        return False
    return role in POLICY[destination]


def navigation_for(role: Optional[Role]) -> list[NavEntry]:
    """Sidebar entries visible to `role`; groups with no visible child are dropped."""
    if role is None:
        return []

    visible: list[NavEntry] = []
    for entry in NAVIGATION:
        if entry.is_group:
            children = tuple(c for c in entry.children if can_access(role, c.destination))
            if children:
                visible.append(NavEntry(entry.title, entry.icon, children=children))
        elif can_access(role, entry.destination):
            visible.append(entry)
    return visible


def allowed_destinations(role: Optional[Role]) -> tuple[Destination, ...]:
    return tuple(_flatten(tuple(navigation_for(role))))


def dashboard_for(role: Optional[Role]) -> DashboardVariant:
    if role is None:
        return DashboardVariant.WELCOME
    return DASHBOARDS.get(role, DashboardVariant.WELCOME)
