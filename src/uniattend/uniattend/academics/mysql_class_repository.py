from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AcademicClass
from .repository import ClassRepository

_SELECT = """
    SELECT c.id, c.name, c.major_id, c.year, c.semester, c.academic_year, c.`group`, c.is_active,
           c.created_at, c.updated_at, m.name AS major_name
    FROM classes c
    LEFT JOIN majors m ON m.id = c.major_id
"""


def _to_class(r: dict) -> AcademicClass:
    return AcademicClass(
        id=int(r["id"]),
        name=r["name"],
        major_id=int(r["major_id"]),
        year=int(r["year"]),
        semester=int(r["semester"]),
        academic_year=r["academic_year"],
        group=r.get("group") or "",
        is_active=bool(r.get("is_active", True)),
        major_name=r.get("major_name"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AcademicClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY c.name")
            return [_to_class(r) for r in fetchall(cur)]

    def list_active_by_major(self, major_id: int) -> Sequence[AcademicClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE c.major_id=%s AND c.is_active=1 ORDER BY c.name", (int(major_id),))
            return [_to_class(r) for r in fetchall(cur)]

    def count_by_major(self, major_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM classes WHERE major_id=%s", (int(major_id),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def get_by_id(self, class_id: int) -> Optional[AcademicClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE c.id=%s", (int(class_id),))
            r = fetchone(cur)
            return _to_class(r) if r else None

    def create(
        self,
        *,
        name: str,
        major_id: int,
        year: int,
        semester: int,
        academic_year: str,
        group: str,
        is_active: bool,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO classes(name, major_id, year, semester, academic_year, `group`, is_active,
                                    created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,NOW(),NOW())
                """,
                (name, int(major_id), int(year), int(semester), academic_year, group, int(bool(is_active))),
            )
            return int(cur.lastrowid)

    def update(
        self,
        class_id: int,
        *,
        name: str,
        major_id: int,
        year: int,
        semester: int,
        academic_year: str,
        group: str,
        is_active: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE classes
                SET name=%s, major_id=%s, year=%s, semester=%s, academic_year=%s, `group`=%s, is_active=%s,
                    updated_at=NOW()
                WHERE id=%s
                """,
                (
                    name,
                    int(major_id),
                    int(year),
                    int(semester),
                    academic_year,
                    group,
                    int(bool(is_active)),
                    int(class_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM classes WHERE id=%s", (int(class_id),))
            return cur.rowcount > 0
