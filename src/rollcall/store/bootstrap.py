from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List

from werkzeug.security import generate_password_hash

from ..core.constants import CREDENTIALS, USERS
from ..core.enums import Role
from .connection import DatabaseConnection
from .document_store import DocumentStore, Where

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS = [
    # (user id, email, password, name, role, department)
    ("demo-professor", "professor@example.edu", "professor123", "Ada Lovelace", Role.PROFESSOR, "Mathematics"),
    ("demo-student", "student@example.edu", "student123", "Alan Turing", Role.STUDENT, "Computer Science"),
]


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: List[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
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


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> None:
    ensure_database_exists(conn_factory)

    sql = _strip_comments(_strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8")))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied schema %s to %s", schema_path, conn_factory.config.database)


def list_tables(conn_factory: DatabaseConnection) -> List[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def ensure_demo_accounts(store: DocumentStore) -> List[str]:
    """Upsert the demo professor and student (credentials + user profile).

    Works against any DocumentStore backend. Returns the seeded user ids.
    """

    seeded: List[str] = []
    for user_id, email, password, name, role, department in DEMO_ACCOUNTS:
        email = email.strip().lower()
        for existing in store.query(CREDENTIALS, Where.eq("email", email)):
            if existing.id != user_id:
                store.delete(CREDENTIALS, existing.id)

        store.set(CREDENTIALS, user_id, {"email": email, "passwordHash": generate_password_hash(password)})
        store.set(
            USERS,
            user_id,
            {"email": email, "name": name, "role": role.value, "department": department},
        )
        seeded.append(user_id)
        logger.info("Seeded demo account %s (%s)", email, role.value)
    return seeded
