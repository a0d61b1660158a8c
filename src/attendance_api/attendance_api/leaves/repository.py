from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> LeaveRequest:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def find_overlapping(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        exclude_leave_id: Optional[int] = None,
    ) -> Optional[LeaveRequest]:
        """First non-rejected request of the user intersecting [start_date, end_date]."""

        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        """Newest start date first."""

        raise NotImplementedError

    def list_all(self, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRequest]:
        """Newest created first, owner details attached."""

        raise NotImplementedError

    def count_by_status(self, status: LeaveStatus) -> int:
        raise NotImplementedError

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
        raise NotImplementedError

    def delete(self, leave_id: int) -> bool:
        raise NotImplementedError
