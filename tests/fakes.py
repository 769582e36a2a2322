"""In-memory repositories used by the test suite (no database)."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from werkzeug.security import generate_password_hash

from src.uniattend.uniattend.academics.model import AcademicClass, Schedule
from src.uniattend.uniattend.attendance.model import AttendanceRecord
from src.uniattend.uniattend.configuration.model import Department, Major, Subject
from src.uniattend.uniattend.container import wire_services
from src.uniattend.uniattend.core.enums import LeaveStatus, Role, UserStatus
from src.uniattend.uniattend.core.exceptions import BackendUnavailableError
from src.uniattend.uniattend.leaves.model import LeaveRequest
from src.uniattend.uniattend.users.model import User

FIXED_NOW = datetime(2026, 3, 2, 9, 0, 0)


class _Table:
    def __init__(self):
        self.rows: dict = {}
        self._next_id = 1

    def next_id(self) -> int:
        rid = self._next_id
        self._next_id += 1
        return rid


class FakeUserRepo(_Table):
    def __init__(self):
        super().__init__()
        self.fail = False

    def add(self, unique_id, password, role, *, name=None, department_id=None, status=UserStatus.ACTIVE):
        return self.create_user(
            unique_id=unique_id,
            name=name or unique_id.title(),
            email=None,
            password_hash=generate_password_hash(password),
            role=role,
            department_id=department_id,
            class_id=None,
            status=status,
        )

    def get_by_id(self, user_id):
        return self.rows.get(int(user_id))

    def get_by_unique_id(self, unique_id):
        if self.fail:
            raise BackendUnavailableError("Database connection failed: unreachable")
        return next((u for u in self.rows.values() if u.unique_id == unique_id), None)

    def list_all(self):
        return sorted(self.rows.values(), key=lambda u: u.id, reverse=True)

    def list_active_by_role(self, role):
        return sorted((u for u in self.rows.values() if u.role == role and u.is_active), key=lambda u: u.name)

    def list_active_by_department(self, department_id):
        return sorted(
            (u for u in self.rows.values() if u.department_id == department_id and u.is_active),
            key=lambda u: u.name,
        )

    def create_user(self, *, unique_id, name, email, password_hash, role, department_id, class_id, status):
        uid = self.next_id()
        self.rows[uid] = User(
            id=uid,
            unique_id=unique_id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            department_id=department_id,
            class_id=class_id,
            status=status,
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
        )
        return uid

    def update_user(self, user_id, *, name, email, role, department_id, class_id, status, password_hash=None):
        user = self.rows.get(int(user_id))
        if not user:
            return False
        self.rows[user.id] = replace(
            user,
            name=name,
            email=email,
            role=role,
            department_id=department_id,
            class_id=class_id,
            status=status,
            password_hash=password_hash or user.password_hash,
        )
        return True

    def delete_by_id(self, user_id):
        return self.rows.pop(int(user_id), None) is not None

    def count(self):
        return len(self.rows)


class FakeDepartmentRepo(_Table):
    def list_all(self):
        return sorted(self.rows.values(), key=lambda d: d.name)

    def get_by_id(self, department_id):
        return self.rows.get(int(department_id))

    def create(self, *, name, short_name):
        did = self.next_id()
        self.rows[did] = Department(id=did, name=name, short_name=short_name, created_at=FIXED_NOW)
        return did

    def update(self, department_id, *, name, short_name):
        dept = self.rows.get(int(department_id))
        if not dept:
            return False
        self.rows[dept.id] = replace(dept, name=name, short_name=short_name)
        return True

    def delete(self, department_id):
        return self.rows.pop(int(department_id), None) is not None


class FakeMajorRepo(_Table):
    def __init__(self, departments: FakeDepartmentRepo):
        super().__init__()
        self._departments = departments

    def _joined(self, major):
        dept = self._departments.get_by_id(major.department_id)
        return replace(major, department_short_name=dept.short_name if dept else None)

    def list_all(self):
        return [self._joined(m) for m in sorted(self.rows.values(), key=lambda m: m.name)]

    def list_by_department(self, department_id):
        return [m for m in self.list_all() if m.department_id == int(department_id)]

    def get_by_id(self, major_id):
        major = self.rows.get(int(major_id))
        return self._joined(major) if major else None

    def create(self, *, name, short_name, department_id):
        mid = self.next_id()
        self.rows[mid] = Major(id=mid, name=name, short_name=short_name, department_id=department_id)
        return mid

    def update(self, major_id, *, name, short_name, department_id):
        major = self.rows.get(int(major_id))
        if not major:
            return False
        self.rows[major.id] = replace(major, name=name, short_name=short_name, department_id=department_id)
        return True

    def delete(self, major_id):
        return self.rows.pop(int(major_id), None) is not None


class FakeSubjectRepo(_Table):
    def list_all(self):
        return sorted(self.rows.values(), key=lambda s: s.name)

    def get_by_id(self, subject_id):
        return self.rows.get(int(subject_id))

    def get_by_code(self, code):
        return next((s for s in self.rows.values() if s.code == code), None)

    def create(self, *, name, code, credits):
        sid = self.next_id()
        self.rows[sid] = Subject(id=sid, name=name, code=code, credits=credits)
        return sid

    def update(self, subject_id, *, name, code, credits):
        subject = self.rows.get(int(subject_id))
        if not subject:
            return False
        self.rows[subject.id] = replace(subject, name=name, code=code, credits=credits)
        return True

    def delete(self, subject_id):
        return self.rows.pop(int(subject_id), None) is not None


class FakeClassRepo(_Table):
    def list_all(self):
        return sorted(self.rows.values(), key=lambda c: c.name)

    def list_active_by_major(self, major_id):
        return [c for c in self.list_all() if c.major_id == int(major_id) and c.is_active]

    def count_by_major(self, major_id):
        return sum(1 for c in self.rows.values() if c.major_id == int(major_id))

    def get_by_id(self, class_id):
        return self.rows.get(int(class_id))

    def create(self, **fields):
        cid = self.next_id()
        self.rows[cid] = AcademicClass(id=cid, **fields)
        return cid

    def update(self, class_id, **fields):
        cls = self.rows.get(int(class_id))
        if not cls:
            return False
        self.rows[cls.id] = replace(cls, **fields)
        return True

    def delete(self, class_id):
        return self.rows.pop(int(class_id), None) is not None


class FakeScheduleRepo(_Table):
    def list_all(self):
        return sorted(self.rows.values(), key=lambda s: (s.day_of_week.index, s.start_time))

    def list_by_class(self, class_id):
        return [s for s in self.list_all() if s.class_id == int(class_id)]

    def count_by_class(self, class_id):
        return sum(1 for s in self.rows.values() if s.class_id == int(class_id))

    def count_by_subject(self, subject_id):
        return sum(1 for s in self.rows.values() if s.subject_id == int(subject_id))

    def get_by_id(self, schedule_id):
        return self.rows.get(int(schedule_id))

    def create(self, **fields):
        sid = self.next_id()
        self.rows[sid] = Schedule(id=sid, **fields)
        return sid

    def update(self, schedule_id, **fields):
        schedule = self.rows.get(int(schedule_id))
        if not schedule:
            return False
        self.rows[schedule.id] = replace(schedule, **fields)
        return True

    def delete(self, schedule_id):
        return self.rows.pop(int(schedule_id), None) is not None


class FakeAttendanceRepo(_Table):
    def list_for_user(self, user_id, *, start=None, end=None):
        rows = [
            r
            for r in self.rows.values()
            if r.user_id == int(user_id) and (start is None or r.date >= start) and (end is None or r.date <= end)
        ]
        return sorted(rows, key=lambda r: r.date, reverse=True)

    def list_by_date(self, day):
        return [r for r in self.rows.values() if r.date == day]

    def upsert(self, *, user_id, day, status, notes=None):
        existing = next((r for r in self.rows.values() if r.user_id == int(user_id) and r.date == day), None)
        if existing:
            record = replace(existing, status=status, notes=notes)
        else:
            record = AttendanceRecord(id=self.next_id(), user_id=int(user_id), date=day, status=status, notes=notes)
        self.rows[record.id] = record
        return record


class FakeLeaveRepo(_Table):
    def __init__(self, users: FakeUserRepo):
        super().__init__()
        self._users = users

    def _joined(self, req):
        user = self._users.get_by_id(req.user_id)
        return replace(
            req,
            requester_name=user.name if user else None,
            requester_department_id=user.department_id if user else None,
        )

    def _newest_first(self, rows):
        return [self._joined(r) for r in sorted(rows, key=lambda r: r.id, reverse=True)]

    def create(self, *, user_id, from_date, to_date, reason):
        rid = self.next_id()
        self.rows[rid] = LeaveRequest(
            id=rid,
            user_id=int(user_id),
            from_date=from_date,
            to_date=to_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=FIXED_NOW,
        )
        return rid

    def get_by_id(self, request_id):
        req = self.rows.get(int(request_id))
        return self._joined(req) if req else None

    def list_by_user(self, user_id):
        return self._newest_first(r for r in self.rows.values() if r.user_id == int(user_id))

    def list_by_department(self, department_id, *, status=None):
        return [
            r
            for r in self._newest_first(self.rows.values())
            if r.requester_department_id == int(department_id) and (status is None or r.status == status)
        ]

    def list_by_status(self, status):
        return self._newest_first(r for r in self.rows.values() if r.status == status)

    def decide(self, *, request_id, status, reviewer_id, comments=None):
        req = self.rows.get(int(request_id))
        if not req or req.status != LeaveStatus.PENDING:
            return False
        self.rows[req.id] = replace(
            req, status=status, reviewer_id=int(reviewer_id), reviewed_at=FIXED_NOW, comments=comments
        )
        return True

    def cancel(self, *, request_id, user_id):
        req = self.rows.get(int(request_id))
        if not req or req.user_id != int(user_id) or req.status != LeaveStatus.PENDING:
            return False
        self.rows[req.id] = replace(req, status=LeaveStatus.CANCELLED)
        return True


class FakeStore:
    """All fake repositories plus a few seeded rows shared by the tests."""

    def __init__(self):
        self.users = FakeUserRepo()
        self.departments = FakeDepartmentRepo()
        self.majors = FakeMajorRepo(self.departments)
        self.subjects = FakeSubjectRepo()
        self.classes = FakeClassRepo()
        self.schedules = FakeScheduleRepo()
        self.attendance = FakeAttendanceRepo()
        self.leaves = FakeLeaveRepo(self.users)

    def seed(self) -> "FakeStore":
        cs = self.departments.create(name="Computer Science", short_name="CS")
        adm = self.departments.create(name="Administration", short_name="ADM")
        self.admin_id = self.users.add("ADMIN001", "admin123", Role.ADMIN, name="System Administrator")
        self.head_id = self.users.add("HEAD001", "head123", Role.HEAD, name="Head CS", department_id=cs)
        self.hr_id = self.users.add("HR001", "hr123456", Role.HR_ASSISTANT, department_id=adm)
        self.mod_id = self.users.add("MOD001", "mod123456", Role.CLASS_MODERATOR, department_id=cs)
        self.teacher_id = self.users.add("TEACH001", "teacher123", Role.TEACHER, name="Teacher One", department_id=cs)
        self.staff_id = self.users.add("STAFF001", "staff123", Role.STAFF, name="Staff One", department_id=cs)
        self.cs_id, self.adm_id = cs, adm
        return self

    def container(self):
        return wire_services(
            users_repo=self.users,
            departments_repo=self.departments,
            majors_repo=self.majors,
            subjects_repo=self.subjects,
            classes_repo=self.classes,
            schedules_repo=self.schedules,
            attendance_repo=self.attendance,
            leaves_repo=self.leaves,
        )
