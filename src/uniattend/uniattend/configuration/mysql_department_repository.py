from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Department
from .repository import DepartmentRepository


def _to_department(r: dict) -> Department:
    return Department(
        id=int(r["id"]),
        name=r["name"],
        short_name=r["short_name"],
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, short_name, created_at, updated_at FROM departments ORDER BY name")
            return [_to_department(r) for r in fetchall(cur)]

    def get_by_id(self, department_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, short_name, created_at, updated_at FROM departments WHERE id=%s",
                (int(department_id),),
            )
            r = fetchone(cur)
            return _to_department(r) if r else None

    def create(self, *, name: str, short_name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO departments(name, short_name, created_at, updated_at) VALUES(%s,%s,NOW(),NOW())",
                (name, short_name),
            )
            return int(cur.lastrowid)

    def update(self, department_id: int, *, name: str, short_name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE departments SET name=%s, short_name=%s, updated_at=NOW() WHERE id=%s",
                (name, short_name, int(department_id)),
            )
            return cur.rowcount > 0

    def delete(self, department_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE id=%s", (int(department_id),))
            return cur.rowcount > 0
