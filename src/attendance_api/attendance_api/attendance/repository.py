from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceAdminRow, AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_latest_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        """Most recent record of the day, preferring an open one."""

        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Newest first (work_date, then check-in time)."""

        raise NotImplementedError

    def list_all(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        user_id: Optional[int] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceAdminRow]:
        raise NotImplementedError

    def count_for_date(self, work_date: date, *, status: AttendanceStatus) -> int:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        """Insert an open record; raises AlreadyCheckedIn if one is already open."""

        raise NotImplementedError

    def close(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        total_hours: float,
        notes: Optional[str],
    ) -> Optional[AttendanceRecord]:
        """Close an open record; None when it was not open anymore."""

        raise NotImplementedError

    def update_status_notes(
        self,
        *,
        attendance_id: int,
        status: AttendanceStatus,
        notes: Optional[str],
    ) -> Optional[AttendanceRecord]:
        """Admin-only override of status/notes."""

        raise NotImplementedError
