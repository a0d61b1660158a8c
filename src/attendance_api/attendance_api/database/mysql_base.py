from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import mysql.connector

from ..core.constants import MYSQL_DUPLICATE_ENTRY
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    """Yield ``(connection, cursor)``; commit when the block succeeds, roll back otherwise."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
    except Exception:
        conn.rollback()
        raise
    else:
        conn.commit()
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or ())


def is_duplicate_key(exc: BaseException) -> bool:
    """True for a UNIQUE / PRIMARY KEY violation (MySQL error 1062)."""
    if not isinstance(exc, mysql.connector.IntegrityError):
        return False
    return getattr(exc, "errno", None) == MYSQL_DUPLICATE_ENTRY


def where_clause(clauses: Sequence[str]) -> str:
    if not clauses:
        return ""
    return "WHERE " + " AND ".join(clauses)
