from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for access control."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database and sent on the wire."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"
    ON_LEAVE = "on-leave"


class LeaveType(str, Enum):
    SICK = "sick"
    VACATION = "vacation"
    PERSONAL = "personal"
    OTHER = "other"


class LeaveStatus(str, Enum):
    """Approval workflow state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TodayState(str, Enum):
    NOT_CHECKED_IN = "not_checked_in"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
