from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Subject
from .repository import SubjectRepository

_SELECT = "SELECT id, name, code, credits, created_at, updated_at FROM subjects"


def _to_subject(r: dict) -> Subject:
    return Subject(
        id=int(r["id"]),
        name=r["name"],
        code=r["code"],
        credits=int(r["credits"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY name")
            return [_to_subject(r) for r in fetchall(cur)]

    def get_by_id(self, subject_id: int) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE id=%s", (int(subject_id),))
            r = fetchone(cur)
            return _to_subject(r) if r else None

    def get_by_code(self, code: str) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE code=%s", (code,))
            r = fetchone(cur)
            return _to_subject(r) if r else None

    def create(self, *, name: str, code: str, credits: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO subjects(name, code, credits, created_at, updated_at) VALUES(%s,%s,%s,NOW(),NOW())",
                (name, code, int(credits)),
            )
            return int(cur.lastrowid)

    def update(self, subject_id: int, *, name: str, code: str, credits: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE subjects SET name=%s, code=%s, credits=%s, updated_at=NOW() WHERE id=%s",
                (name, code, int(credits), int(subject_id)),
            )
            return cur.rowcount > 0

    def delete(self, subject_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM subjects WHERE id=%s", (int(subject_id),))
            return cur.rowcount > 0
