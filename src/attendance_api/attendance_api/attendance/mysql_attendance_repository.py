from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, where_clause
from ..users.model import UserSummary
from .model import AttendanceAdminRow, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = (
    "ar.attendance_id, ar.user_id, ar.work_date, ar.check_in_time, ar.check_out_time, "
    "ar.status, ar.total_hours, ar.notes, ar.created_at, ar.updated_at"
)


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    total = r.get("total_hours")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        total_hours=float(total) if total is not None else None,
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records ar WHERE ar.attendance_id=%s",
                (int(attendance_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_open_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records ar
                WHERE ar.user_id=%s AND ar.work_date=%s AND ar.check_out_time IS NULL
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_latest_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records ar
                WHERE ar.user_id=%s AND ar.work_date=%s
                ORDER BY (ar.check_out_time IS NULL) DESC, ar.check_in_time DESC
                LIMIT 1
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["ar.user_id=%s"]
        params: list[object] = [int(user_id)]
        if start_date is not None:
            clauses.append("ar.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("ar.work_date <= %s")
            params.append(end_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records ar
                {where_clause(clauses)}
                ORDER BY ar.work_date DESC, ar.check_in_time DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_all(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        user_id: Optional[int] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceAdminRow]:
        clauses: list[str] = []
        params: list[object] = []
        if start_date is not None:
            clauses.append("ar.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("ar.work_date <= %s")
            params.append(end_date)
        if user_id is not None:
            clauses.append("ar.user_id=%s")
            params.append(int(user_id))
        if status is not None:
            clauses.append("ar.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS},
                    u.name, u.email, u.employee_id, u.department, u.position
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.user_id
                {where_clause(clauses)}
                ORDER BY ar.work_date DESC, ar.check_in_time DESC
                """,
                tuple(params),
            )
            return [
                AttendanceAdminRow(
                    record=_to_record(r),
                    user=UserSummary(
                        user_id=int(r["user_id"]),
                        name=r["name"],
                        email=r["email"],
                        employee_id=r.get("employee_id"),
                        department=r.get("department"),
                        position=r.get("position"),
                    ),
                )
                for r in fetchall(cur)
            ]

    def count_for_date(self, work_date: date, *, status: AttendanceStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(DISTINCT user_id) AS n
                FROM attendance_records
                WHERE work_date=%s AND status=%s
                """,
                (work_date, status.value),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, work_date, check_in_time, status, notes)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(user_id), work_date, check_in_time, status.value, notes),
                )
                attendance_id = int(cur.lastrowid)
        except Exception as e:
            # uq_attendance_open: another request opened a session first.
            if is_duplicate_key(e):
                raise AlreadyCheckedIn("You have already checked in today") from e
            raise

        return self._require(attendance_id)

    def close(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        total_hours: float,
        notes: Optional[str],
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, total_hours=%s, notes=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, total_hours, notes, int(attendance_id)),
            )
            closed = cur.rowcount > 0

        return self.get_by_id(attendance_id) if closed else None

    def update_status_notes(
        self,
        *,
        attendance_id: int,
        status: AttendanceStatus,
        notes: Optional[str],
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, notes=%s
                WHERE attendance_id=%s
                """,
                (status.value, notes, int(attendance_id)),
            )

        return self.get_by_id(attendance_id)

    def _require(self, attendance_id: int) -> AttendanceRecord:
        record = self.get_by_id(attendance_id)
        if record is None:
            raise RuntimeError(f"attendance record {attendance_id} vanished after write")
        return record
