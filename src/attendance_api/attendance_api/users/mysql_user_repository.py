from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, name, email, password_hash, role, employee_id, department, position, is_active, created_at"


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        employee_id=row.get("employee_id"),
        department=row.get("department"),
        position=row.get("position"),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE LOWER(email)=LOWER(%s)", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        employee_id: Optional[str],
        department: Optional[str],
        position: Optional[str],
    ) -> User:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(name, email, password_hash, role, employee_id, department, position, is_active)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,1)
                    """,
                    (name, email, password_hash, role.value, employee_id, department, position),
                )
                user_id = int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Email is already registered") from e
            raise

        user = self.get_by_id(user_id)
        if user is None:
            raise RuntimeError(f"user {user_id} vanished after insert")
        return user

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY name ASC")
            return [_to_user(r) for r in fetchall(cur)]

    def count_by_role(self, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM users WHERE role=%s AND is_active=1", (role.value,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0
