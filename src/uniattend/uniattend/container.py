from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .academics.mysql_class_repository import MySQLClassRepository
from .academics.mysql_schedule_repository import MySQLScheduleRepository
from .academics.service import AcademicService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .auth.service import AuthService
from .configuration.mysql_department_repository import MySQLDepartmentRepository
from .configuration.mysql_major_repository import MySQLMajorRepository
from .configuration.mysql_subject_repository import MySQLSubjectRepository
from .configuration.service import ConfigurationService
from .dashboards.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    user_service: UserService
    configuration_service: ConfigurationService
    academic_service: AcademicService
    attendance_service: AttendanceService
    leave_service: LeaveService
    dashboard_service: DashboardService

    conn: Optional[DatabaseConnection] = None


def wire_services(*, users_repo, departments_repo, majors_repo, subjects_repo, classes_repo,
                  schedules_repo, attendance_repo, leaves_repo, conn=None) -> Container:
    """Build the service graph over any set of repositories (MySQL or in-memory)."""
    user_service = UserService(users_repo)
    configuration_service = ConfigurationService(
        departments_repo, majors_repo, subjects_repo, classes_repo, schedules_repo
    )
    academic_service = AcademicService(classes_repo, schedules_repo, majors_repo, subjects_repo)
    attendance_service = AttendanceService(attendance_repo, users_repo)
    leave_service = LeaveService(leaves_repo)

    return Container(
        auth_service=AuthService(users_repo),
        user_service=user_service,
        configuration_service=configuration_service,
        academic_service=academic_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        dashboard_service=DashboardService(
            user_service,
            configuration_service,
            academic_service,
            attendance_service,
            leave_service,
        ),
        conn=conn,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire_services(
        users_repo=MySQLUserRepository(conn),
        departments_repo=MySQLDepartmentRepository(conn),
        majors_repo=MySQLMajorRepository(conn),
        subjects_repo=MySQLSubjectRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        conn=conn,
    )
