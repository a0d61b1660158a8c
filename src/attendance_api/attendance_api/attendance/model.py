from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat
from ..core.enums import AttendanceStatus, TodayState
from ..users.model import UserSummary


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance session of a user on a work date."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    total_hours: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "user": self.user_id,
            "date": isoformat(self.work_date),
            "checkIn": isoformat(self.check_in_time),
            "checkOut": isoformat(self.check_out_time),
            "status": self.status.value,
            "totalHours": self.total_hours,
            "notes": self.notes,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


@dataclass(frozen=True)
class AttendanceAdminRow:
    """Read-model for admin listings: the record plus its owner's details."""

    record: AttendanceRecord
    user: UserSummary

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["user"] = self.user.to_dict()
        return data


@dataclass(frozen=True)
class TodayAttendance:
    state: TodayState
    record: Optional[AttendanceRecord] = None

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "checkedIn": self.state == TodayState.CHECKED_IN,
            "data": self.record.to_dict() if self.record else None,
        }
