from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from ..core.enums import Role
from ..storage.repository import DocumentRepository
from .connection import DatabaseConnection


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Splits on ';' outside quotes; '--' comment lines are dropped first.
    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]
    buf: list[str] = []
    quote = None
    for ch in "\n".join(lines):
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf = []
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> None:
    ensure_database_exists(conn_factory)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


DEMO_USERS = (
    {"username": "superadmin", "password": "admin123", "role": Role.SUPER_ADMIN.value,
     "name": "Super Admin", "department": "Product Management"},
    {"username": "director", "password": "director123", "role": Role.MANAGING_DIRECTOR.value,
     "name": "Maria Director", "department": "Product Management", "division": "Technology Division"},
    {"username": "grouphead", "password": "group123", "role": Role.GROUP_HEAD.value,
     "name": "Ken Group Head", "department": "Backend Development", "division": "Technology Division"},
    {"username": "gtl", "password": "gtl123", "role": Role.GROUP_TEAM_LEADER.value,
     "name": "Lan Group Team Leader", "department": "Backend Development"},
    {"username": "leader", "password": "leader123", "role": Role.TEAM_LEADER.value,
     "name": "Tom Team Leader", "department": "Backend Development", "division": "Technology Division"},
    {"username": "member", "password": "member123", "role": Role.TEAM_MEMBER.value,
     "name": "An Team Member", "department": "Backend Development"},
)


def ensure_demo_users(users: DocumentRepository) -> int:
    """Create the demo accounts that are missing. Returns how many were added."""
    added = 0
    leader_id = None
    for record in DEMO_USERS:
        existing = users.find_by("username", record["username"])
        if existing:
            saved = existing[0]
        else:
            payload = dict(record)
            if payload["role"] == Role.TEAM_MEMBER.value and leader_id:
                payload["teamLeaderId"] = leader_id
            saved = users.create(payload)
            added += 1
        if saved.get("role") == Role.TEAM_LEADER.value:
            leader_id = saved["id"]
    return added
