from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import optional_text, reject_unknown_fields, require_choice
from ..core.enums import AttendanceStatus, TodayState
from ..core.exceptions import AlreadyCheckedIn, NoOpenSession, NotFoundError, ValidationError
from .hours import compute_total_hours
from .model import AttendanceAdminRow, AttendanceRecord, TodayAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

ADMIN_PATCH_FIELDS = ("status", "notes")


def _whole_seconds(value: datetime) -> datetime:
    # check_in_time / check_out_time are DATETIME columns without fractional seconds.
    return value.replace(microsecond=0)


class AttendanceService:
    """Check-in/check-out lifecycle and attendance queries.

    Every write goes through exactly one repository mutation. The derived
    ``total_hours`` is computed here, at the point of commit, by
    :func:`compute_total_hours`.
    """

    def __init__(self, attendance: AttendanceRepository, *, clock: Optional[Callable[[], datetime]] = None):
        self._attendance = attendance
        self._clock = clock or now_local

    def check_in(self, user_id: int, *, notes: Optional[str] = None, now: datetime | None = None) -> AttendanceRecord:
        notes = optional_text(notes, "notes")
        now = _whole_seconds(now or self._clock())
        today = now.date()

        if self._attendance.get_open_for_user_and_date(user_id, today):
            logger.warning("user %s tried to check in twice on %s", user_id, today)
            raise AlreadyCheckedIn("You have already checked in today")

        record = self._attendance.create_checkin(
            user_id=user_id,
            work_date=today,
            check_in_time=now,
            status=AttendanceStatus.PRESENT,
            notes=notes,
        )
        logger.info("user %s checked in (record %s)", user_id, record.attendance_id)
        return record

    def check_out(
        self,
        user_id: int,
        *,
        notes: Optional[str] = None,
        attendance_id: Optional[int] = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        notes = optional_text(notes, "notes")
        now = _whole_seconds(now or self._clock())

        record = self._find_open_session(user_id, now.date(), attendance_id)
        if record is None:
            raise NoOpenSession("No check-in record found for today")

        total_hours = compute_total_hours(record.check_in_time, now)
        closed = self._attendance.close(
            attendance_id=record.attendance_id,
            check_out_time=now,
            total_hours=total_hours,
            notes=notes if notes is not None else record.notes,
        )
        if closed is None:
            # Closed by a concurrent request between the read and the write.
            raise NoOpenSession("You have already checked out")

        logger.info("user %s checked out (record %s, %.2fh)", user_id, closed.attendance_id, total_hours)
        return closed

    def _find_open_session(self, user_id: int, today: date, attendance_id: Optional[int]) -> Optional[AttendanceRecord]:
        """The caller's record named by ``attendance_id``, else today's open record."""
        if attendance_id is not None:
            record = self._attendance.get_by_id(attendance_id)
            if record is not None and record.user_id == user_id:
                if not record.is_open:
                    raise NoOpenSession("You have already checked out today")
                return record
        return self._attendance.get_open_for_user_and_date(user_id, today)

    def get_todays_attendance(self, user_id: int, *, now: datetime | None = None) -> TodayAttendance:
        today = (now or self._clock()).date()
        record = self._attendance.get_latest_for_user_and_date(user_id, today)
        if record is None:
            return TodayAttendance(state=TodayState.NOT_CHECKED_IN)
        state = TodayState.CHECKED_IN if record.is_open else TodayState.CHECKED_OUT
        return TodayAttendance(state=state, record=record)

    def get_my_attendance(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        _check_range(start, end)
        return self._attendance.list_for_user(user_id, start_date=start, end_date=end)

    def get_all_attendance(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        user_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> Sequence[AttendanceAdminRow]:
        _check_range(start, end)
        status_filter = require_choice(status, AttendanceStatus, "status") if status else None
        return self._attendance.list_all(start_date=start, end_date=end, user_id=user_id, status=status_filter)

    def update_attendance(self, attendance_id: int, patch: dict) -> AttendanceRecord:
        if not isinstance(patch, dict):
            raise ValidationError("Request body must be a JSON object")
        reject_unknown_fields(patch, ADMIN_PATCH_FIELDS)

        new_status = require_choice(patch["status"], AttendanceStatus, "status") if "status" in patch else None
        new_notes = optional_text(patch.get("notes"), "notes")

        record = self._attendance.get_by_id(attendance_id)
        if record is None:
            raise NotFoundError("Attendance record not found")

        updated = self._attendance.update_status_notes(
            attendance_id=record.attendance_id,
            status=new_status or record.status,
            notes=new_notes if "notes" in patch else record.notes,
        )
        if updated is None:
            raise NotFoundError("Attendance record not found")

        logger.info("attendance %s updated by admin: %s", attendance_id, sorted(patch))
        return updated

    def count_present_today(self, *, now: datetime | None = None) -> int:
        today = (now or self._clock()).date()
        return self._attendance.count_for_date(today, status=AttendanceStatus.PRESENT)


def _check_range(start: Optional[date], end: Optional[date]) -> None:
    if start and end and end < start:
        raise ValidationError("end date must not be before start date")
