from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

# unique_id, name, password, role, department short name
DEMO_USERS = (
    ("ADMIN001", "System Administrator", "admin123", "admin", None),
    ("HEAD001", "Head of Computer Science", "head123", "head", "CS"),
    ("HR001", "HR Assistant", "hr123456", "hr_assistant", "ADM"),
    ("MOD001", "Class Moderator", "mod123456", "class_moderator", "CS"),
    ("TEACH001", "Teacher One", "teacher123", "teacher", "CS"),
    ("STAFF001", "Staff One", "staff123", "staff", "CS"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside quotes; '--' comment lines are dropped."""
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    lines = [ln for ln in sql.splitlines() if not ln.lstrip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(config: DBConfig) -> None:
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def _run_script(config: DBConfig, path: Path) -> None:
    sql = _strip_create_db_and_use(path.read_text(encoding="utf-8"))
    conn = DatabaseConnection(config).connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def apply_schema(config: DBConfig, *, schema_path: str | Path) -> None:
    ensure_database_exists(config)
    _run_script(config, Path(schema_path))
    logger.info("Schema applied to %s", config.describe())


def apply_seed_sql(config: DBConfig, *, seed_path: str | Path) -> None:
    _run_script(config, Path(seed_path))
    logger.info("Seed data applied to %s", config.describe())


def ensure_demo_users(config: DBConfig) -> None:
    """Create or refresh the demo accounts with freshly hashed passwords."""
    conn = DatabaseConnection(config).connect()
    try:
        cur = conn.cursor(dictionary=True)

        def department_id(short_name):
            if short_name is None:
                return None
            cur.execute("SELECT id FROM departments WHERE short_name=%s", (short_name,))
            row = cur.fetchone()
            if not row:
                raise RuntimeError(f"Missing departments row for short_name={short_name}")
            return int(row["id"])

        for unique_id, name, password, role, dept in DEMO_USERS:
            password_hash = generate_password_hash(password)
            dept_id = department_id(dept)
            cur.execute("SELECT id FROM users WHERE unique_id=%s", (unique_id,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET name=%s, password_hash=%s, role=%s, department_id=%s, status='active', updated_at=NOW()
                    WHERE unique_id=%s
                    """,
                    (name, password_hash, role, dept_id, unique_id),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (unique_id, name, password_hash, role, department_id, status)
                    VALUES (%s, %s, %s, %s, %s, 'active')
                    """,
                    (unique_id, name, password_hash, role, dept_id),
                )

        conn.commit()
        logger.info("Demo users ready (%d accounts)", len(DEMO_USERS))
    finally:
        conn.close()


def list_tables(config: DBConfig) -> list[str]:
    conn = DatabaseConnection(config).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
