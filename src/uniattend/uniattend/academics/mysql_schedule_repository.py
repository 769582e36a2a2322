from __future__ import annotations

from datetime import time
from typing import Optional, Sequence

from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Schedule
from .repository import ScheduleRepository

_SELECT = """
    SELECT s.id, s.class_id, s.subject_id, s.room, s.day_of_week, s.start_time, s.end_time,
           s.academic_year, s.semester, s.created_at, s.updated_at,
           c.name AS class_name, sub.name AS subject_name, sub.code AS subject_code
    FROM schedules s
    LEFT JOIN classes c ON c.id = s.class_id
    LEFT JOIN subjects sub ON sub.id = s.subject_id
"""

# Weekday order, not alphabetical.
_ORDER = """
    ORDER BY FIELD(s.day_of_week, 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday'),
             s.start_time
"""


def _to_schedule(r: dict) -> Schedule:
    return Schedule(
        id=int(r["id"]),
        class_id=int(r["class_id"]),
        subject_id=int(r["subject_id"]),
        room=r.get("room"),
        day_of_week=Weekday(r["day_of_week"]),
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        academic_year=r["academic_year"],
        semester=int(r["semester"]),
        class_name=r.get("class_name"),
        subject_name=r.get("subject_name"),
        subject_code=r.get("subject_code"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {_ORDER}")
            return [_to_schedule(r) for r in fetchall(cur)]

    def list_by_class(self, class_id: int) -> Sequence[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE s.class_id=%s {_ORDER}", (int(class_id),))
            return [_to_schedule(r) for r in fetchall(cur)]

    def count_by_class(self, class_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM schedules WHERE class_id=%s", (int(class_id),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def count_by_subject(self, subject_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM schedules WHERE subject_id=%s", (int(subject_id),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE s.id=%s", (int(schedule_id),))
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def create(
        self,
        *,
        class_id: int,
        subject_id: int,
        room: Optional[str],
        day_of_week: Weekday,
        start_time: time,
        end_time: time,
        academic_year: str,
        semester: int,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedules(class_id, subject_id, room, day_of_week, start_time, end_time,
                                      academic_year, semester, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,NOW(),NOW())
                """,
                (
                    int(class_id),
                    int(subject_id),
                    room,
                    day_of_week.value,
                    start_time,
                    end_time,
                    academic_year,
                    int(semester),
                ),
            )
            return int(cur.lastrowid)

    def update(
        self,
        schedule_id: int,
        *,
        class_id: int,
        subject_id: int,
        room: Optional[str],
        day_of_week: Weekday,
        start_time: time,
        end_time: time,
        academic_year: str,
        semester: int,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE schedules
                SET class_id=%s, subject_id=%s, room=%s, day_of_week=%s, start_time=%s, end_time=%s,
                    academic_year=%s, semester=%s, updated_at=NOW()
                WHERE id=%s
                """,
                (
                    int(class_id),
                    int(subject_id),
                    room,
                    day_of_week.value,
                    start_time,
                    end_time,
                    academic_year,
                    int(semester),
                    int(schedule_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedules WHERE id=%s", (int(schedule_id),))
            return cur.rowcount > 0
