from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, where_clause
from ..users.model import UserSummary
from .model import LeaveRequest
from .repository import LeaveRepository

_SELECT = """
    SELECT lr.leave_id, lr.user_id, lr.leave_type, lr.start_date, lr.end_date, lr.reason,
           lr.status, lr.approved_by, lr.comments, lr.created_at, lr.updated_at,
           u.name, u.email, u.employee_id, u.department, u.position
    FROM leave_requests lr
    JOIN users u ON u.user_id = lr.user_id
"""


def _to_leave(r: Dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        user_id=int(r["user_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        approved_by=int(r["approved_by"]) if r.get("approved_by") is not None else None,
        comments=r.get("comments"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        owner=UserSummary(
            user_id=int(r["user_id"]),
            name=r["name"],
            email=r["email"],
            employee_id=r.get("employee_id"),
            department=r.get("department"),
            position=r.get("position"),
        ),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> LeaveRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, leave_type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), leave_type.value, start_date, end_date, reason, LeaveStatus.PENDING.value),
            )
            leave_id = int(cur.lastrowid)

        leave = self.get_by_id(leave_id)
        if leave is None:
            raise RuntimeError(f"leave request {leave_id} vanished after insert")
        return leave

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE lr.leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def find_overlapping(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        exclude_leave_id: Optional[int] = None,
    ) -> Optional[LeaveRequest]:
        clauses = ["lr.user_id=%s", "lr.start_date <= %s", "lr.end_date >= %s", "lr.status <> %s"]
        params: list[object] = [int(user_id), end_date, start_date, LeaveStatus.REJECTED.value]
        if exclude_leave_id is not None:
            clauses.append("lr.leave_id <> %s")
            params.append(int(exclude_leave_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where_clause(clauses)} ORDER BY lr.start_date LIMIT 1", tuple(params))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE lr.user_id=%s ORDER BY lr.start_date DESC", (int(user_id),))
            return [_to_leave(r) for r in fetchall(cur)]

    def list_all(self, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRequest]:
        clauses: list[str] = []
        params: list[object] = []
        if status is not None:
            clauses.append("lr.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where_clause(clauses)} ORDER BY lr.created_at DESC, lr.leave_id DESC", tuple(params))
            return [_to_leave(r) for r in fetchall(cur)]

    def count_by_status(self, status: LeaveStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM leave_requests WHERE status=%s", (status.value,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def update(
        self,
        *,
        leave_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
        status: LeaveStatus,
        approved_by: Optional[int],
        comments: Optional[str],
    ) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET leave_type=%s, start_date=%s, end_date=%s, reason=%s,
                    status=%s, approved_by=%s, comments=%s
                WHERE leave_id=%s
                """,
                (
                    leave_type.value,
                    start_date,
                    end_date,
                    reason,
                    status.value,
                    approved_by,
                    comments,
                    int(leave_id),
                ),
            )

        return self.get_by_id(leave_id)

    def delete(self, leave_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            return cur.rowcount > 0
