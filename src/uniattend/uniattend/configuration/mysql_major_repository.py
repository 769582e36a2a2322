from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Major
from .repository import MajorRepository

_SELECT = """
    SELECT m.id, m.name, m.short_name, m.department_id, m.created_at, m.updated_at,
           d.short_name AS department_short_name
    FROM majors m
    LEFT JOIN departments d ON d.id = m.department_id
"""


def _to_major(r: dict) -> Major:
    return Major(
        id=int(r["id"]),
        name=r["name"],
        short_name=r["short_name"],
        department_id=int(r["department_id"]),
        department_short_name=r.get("department_short_name"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLMajorRepository(MajorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Major]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY m.name")
            return [_to_major(r) for r in fetchall(cur)]

    def list_by_department(self, department_id: int) -> Sequence[Major]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE m.department_id=%s ORDER BY m.name", (int(department_id),))
            return [_to_major(r) for r in fetchall(cur)]

    def get_by_id(self, major_id: int) -> Optional[Major]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE m.id=%s", (int(major_id),))
            r = fetchone(cur)
            return _to_major(r) if r else None

    def create(self, *, name: str, short_name: str, department_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO majors(name, short_name, department_id, created_at, updated_at)
                VALUES(%s,%s,%s,NOW(),NOW())
                """,
                (name, short_name, int(department_id)),
            )
            return int(cur.lastrowid)

    def update(self, major_id: int, *, name: str, short_name: str, department_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE majors SET name=%s, short_name=%s, department_id=%s, updated_at=NOW() WHERE id=%s",
                (name, short_name, int(department_id), int(major_id)),
            )
            return cur.rowcount > 0

    def delete(self, major_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM majors WHERE id=%s", (int(major_id),))
            return cur.rowcount > 0
