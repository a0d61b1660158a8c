from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat
from ..core.enums import LeaveStatus, LeaveType
from ..users.model import UserSummary


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    user_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    approved_by: Optional[int] = None
    comments: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    owner: Optional[UserSummary] = None

    @property
    def duration_days(self) -> int:
        """Inclusive day count (both start and end date are leave days)."""
        return abs((self.end_date - self.start_date).days) + 1

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.PENDING

    def overlaps(self, start: date, end: date) -> bool:
        return self.start_date <= end and self.end_date >= start

    def to_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "user": self.owner.to_dict() if self.owner else self.user_id,
            "leaveType": self.leave_type.value,
            "startDate": isoformat(self.start_date),
            "endDate": isoformat(self.end_date),
            "duration": self.duration_days,
            "reason": self.reason,
            "status": self.status.value,
            "approvedBy": self.approved_by,
            "comments": self.comments,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
