from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role, UserStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = """
    id, unique_id, name, email, password_hash, role,
    department_id, class_id, status, created_at, updated_at
"""


def _to_user(row: dict) -> User:
    return User(
        id=int(row["id"]),
        unique_id=row["unique_id"],
        name=row["name"],
        email=row.get("email"),
        password_hash=row["password_hash"],
        role=Role.parse(row["role"]),
        department_id=row.get("department_id"),
        class_id=row.get("class_id"),
        status=UserStatus(row.get("status") or UserStatus.ACTIVE.value),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_unique_id(self, unique_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE unique_id=%s", (unique_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY created_at DESC, id DESC")
            return [_to_user(r) for r in fetchall(cur)]

    def list_active_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE role=%s AND status=%s ORDER BY name",
                (role.value, UserStatus.ACTIVE.value),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def list_active_by_department(self, department_id: int) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE department_id=%s AND status=%s ORDER BY name",
                (int(department_id), UserStatus.ACTIVE.value),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        unique_id: str,
        name: str,
        email: Optional[str],
        password_hash: str,
        role: Role,
        department_id: Optional[int],
        class_id: Optional[int],
        status: UserStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(unique_id, name, email, password_hash, role, department_id, class_id, status,
                                  created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,NOW(),NOW())
                """,
                (unique_id, name, email, password_hash, role.value, department_id, class_id, status.value),
            )
            return int(cur.lastrowid)

    def update_user(
        self,
        user_id: int,
        *,
        name: str,
        email: Optional[str],
        role: Role,
        department_id: Optional[int],
        class_id: Optional[int],
        status: UserStatus,
        password_hash: Optional[str] = None,
    ) -> bool:
        assignments = ["name=%s", "email=%s", "role=%s", "department_id=%s", "class_id=%s", "status=%s"]
        params: list[object] = [name, email, role.value, department_id, class_id, status.value]
        if password_hash:
            assignments.append("password_hash=%s")
            params.append(password_hash)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE users SET {', '.join(assignments)}, updated_at=NOW() WHERE id=%s",
                tuple(params + [int(user_id)]),
            )
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (int(user_id),))
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM users")
            row = fetchone(cur)
            return int(row["n"]) if row else 0
