from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = "SELECT id, user_id, `date`, status, notes, created_at, updated_at FROM attendance"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        user_id=int(r["user_id"]),
        date=r["date"],
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]

        if start is not None:
            clauses.append("`date` >= %s")
            params.append(start)
        if end is not None:
            clauses.append("`date` <= %s")
            params.append(end)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {where} ORDER BY `date` DESC", tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def list_by_date(self, day: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE `date`=%s ORDER BY user_id", (day,))
            return [_to_record(r) for r in fetchall(cur)]

    def upsert(
        self,
        *,
        user_id: int,
        day: date,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        # Relies on UNIQUE(user_id, date): concurrent markers cannot create duplicates.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(user_id, `date`, status, notes, created_at, updated_at)
                VALUES(%s,%s,%s,%s,NOW(),NOW())
                ON DUPLICATE KEY UPDATE status=VALUES(status), notes=VALUES(notes), updated_at=NOW()
                """,
                (int(user_id), day, status.value, notes),
            )
            cur.execute(f"{_SELECT} WHERE user_id=%s AND `date`=%s", (int(user_id), day))
            return _to_record(fetchone(cur))
