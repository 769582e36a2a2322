from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_SELECT = """
    SELECT r.id, r.user_id, r.from_date, r.to_date, r.reason, r.status,
           r.reviewer_id, r.reviewed_at, r.comments, r.created_at, r.updated_at,
           u.name AS requester_name, u.department_id AS requester_department_id
    FROM leave_requests r
    JOIN users u ON u.id = r.user_id
"""


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        id=int(r["id"]),
        user_id=int(r["user_id"]),
        from_date=r["from_date"],
        to_date=r["to_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        reviewer_id=r.get("reviewer_id"),
        reviewed_at=r.get("reviewed_at"),
        comments=r.get("comments"),
        requester_name=r.get("requester_name"),
        requester_department_id=r.get("requester_department_id"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, from_date: date, to_date: date, reason: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, from_date, to_date, reason, status, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,NOW(),NOW())
                """,
                (int(user_id), from_date, to_date, reason, LeaveStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE r.id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_by_user(self, user_id: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE r.user_id=%s ORDER BY r.created_at DESC, r.id DESC", (int(user_id),))
            return [_to_leave(r) for r in fetchall(cur)]

    def list_by_department(
        self,
        department_id: int,
        *,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        where, params = build_where({"u.department_id": int(department_id), "r.status": status})

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {where} ORDER BY r.created_at DESC, r.id DESC", tuple(params))
            return [_to_leave(r) for r in fetchall(cur)]

    def list_by_status(self, status: LeaveStatus) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE r.status=%s ORDER BY r.created_at DESC, r.id DESC", (status.value,))
            return [_to_leave(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        reviewer_id: int,
        comments: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, reviewer_id=%s, reviewed_at=NOW(), comments=%s, updated_at=NOW()
                WHERE id=%s AND status=%s
                """,
                (status.value, int(reviewer_id), comments, int(request_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def cancel(self, *, request_id: int, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, updated_at=NOW()
                WHERE id=%s AND user_id=%s AND status=%s
                """,
                (LeaveStatus.CANCELLED.value, int(request_id), int(user_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0
