"""Schema install and demo data for a fresh MySQL database.

Used by ``scripts/init_db.py`` / ``scripts/seed_db.py`` and, when
``AUTO_INIT_DB`` / ``AUTO_SEED_DB`` are set, by the app factory.
"""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator, List, Union

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# (name, email, password, role, employee_id)
DEMO_USERS = (
    ("Admin Demo", "admin@example.com", "admin123", "admin", "EMP-0001"),
    ("Employee Demo", "employee@example.com", "employee123", "employee", "EMP-0002"),
)

_DB_NAME_LINES = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")
_COMMENT_LINES = re.compile(r"(?m)^\s*--.*$")
# Quoted literals are matched whole so a ';' inside them never ends a statement.
_SQL_TOKENS = re.compile(r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|;|[^;'"]+|.""", re.S)


def schema_statements(sql: str) -> Iterator[str]:
    """Split a schema script into executable statements.

    ``CREATE DATABASE`` / ``USE`` lines are dropped so the script runs
    against whatever database the connection settings name.
    """
    sql = _COMMENT_LINES.sub("", _DB_NAME_LINES.sub("", sql))
    current: List[str] = []
    for token in _SQL_TOKENS.findall(sql):
        if token != ";":
            current.append(token)
            continue
        stmt = "".join(current).strip()
        current = []
        if stmt:
            yield stmt
    tail = "".join(current).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database
    with closing(conn_factory.connect(with_database=False)) as conn:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Union[str, Path]) -> None:
    ensure_database_exists(conn_factory)
    script = Path(schema_path).read_text(encoding="utf-8")

    with closing(conn_factory.connect()) as conn:
        cur = conn.cursor()
        count = 0
        for stmt in schema_statements(script):
            cur.execute(stmt)
            count += 1
        conn.commit()
    logger.info("applied %d schema statements to %s", count, conn_factory.config.describe())


def ensure_demo_users(conn_factory: DatabaseConnection) -> None:
    """Insert the demo accounts, resetting their password and role if they already exist."""
    with closing(conn_factory.connect()) as conn:
        cur = conn.cursor()
        for name, email, password, role, employee_id in DEMO_USERS:
            cur.execute(
                """
                INSERT INTO users (name, email, password_hash, role, employee_id, department, position)
                VALUES (%s, %s, %s, %s, %s, 'Operations', 'Staff')
                ON DUPLICATE KEY UPDATE
                    name = VALUES(name),
                    password_hash = VALUES(password_hash),
                    role = VALUES(role),
                    is_active = 1
                """,
                (name, email, generate_password_hash(password), role, employee_id),
            )
        conn.commit()
    logger.info("seeded %d demo users", len(DEMO_USERS))


def list_tables(conn_factory: DatabaseConnection) -> List[str]:
    with closing(conn_factory.connect()) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
