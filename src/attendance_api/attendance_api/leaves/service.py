from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_optional_date
from ..common.validators import optional_text, reject_unknown_fields, require_choice, require_non_empty
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..users.model import User
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("leaveType", "startDate", "endDate", "reason")
UPDATE_FIELDS = EDITABLE_FIELDS + ("status", "comments")


@dataclass(frozen=True)
class LeavePatch:
    leave_type: Optional[LeaveType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = None
    status: Optional[LeaveStatus] = None
    comments: Optional[str] = None
    touches_fields: bool = False
    sets_status: bool = False
    sets_comments: bool = False


def _require_date(value: Any, field_name: str) -> date:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")
    parsed = parse_optional_date(value, field_name)
    if parsed is None:
        raise ValidationError(f"{field_name} is required")
    return parsed


def _check_range(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("End date must be after start date")


class LeaveService:
    """Ownership-scoped CRUD over leave requests plus the admin decision flow."""

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def create(
        self,
        actor: User,
        *,
        leave_type: Any,
        start_date: Any,
        end_date: Any,
        reason: Any,
    ) -> LeaveRequest:
        kind = require_choice(leave_type, LeaveType, "leaveType")
        start = _require_date(start_date, "startDate")
        end = _require_date(end_date, "endDate")
        _check_range(start, end)
        reason_s = require_non_empty(reason, "reason")

        if self._leaves.find_overlapping(user_id=actor.user_id, start_date=start, end_date=end):
            raise ConflictError("You already have a leave request that overlaps with these dates")

        leave = self._leaves.create(
            user_id=actor.user_id,
            leave_type=kind,
            start_date=start,
            end_date=end,
            reason=reason_s,
        )
        logger.info("user %s requested %s leave %s..%s", actor.user_id, kind.value, start, end)
        return leave

    def list_mine(self, actor: User) -> Sequence[LeaveRequest]:
        return self._leaves.list_for_user(actor.user_id)

    def list_for_user(self, actor: User, user_id: int) -> Sequence[LeaveRequest]:
        if user_id != actor.user_id and not actor.is_admin:
            raise AuthorizationError("Not authorized to view this user's leave requests")
        return self._leaves.list_for_user(user_id)

    def list_all(self, actor: User, *, status: Optional[str] = None) -> Sequence[LeaveRequest]:
        if not actor.is_admin:
            raise AuthorizationError("Admin access required")
        status_filter = require_choice(status, LeaveStatus, "status") if status else None
        return self._leaves.list_all(status=status_filter)

    def count_pending(self) -> int:
        return self._leaves.count_by_status(LeaveStatus.PENDING)

    @staticmethod
    def parse_patch(patch: Any) -> LeavePatch:
        if not isinstance(patch, dict):
            raise ValidationError("Request body must be a JSON object")
        reject_unknown_fields(patch, UPDATE_FIELDS)

        return LeavePatch(
            leave_type=require_choice(patch["leaveType"], LeaveType, "leaveType") if "leaveType" in patch else None,
            start_date=_require_date(patch["startDate"], "startDate") if "startDate" in patch else None,
            end_date=_require_date(patch["endDate"], "endDate") if "endDate" in patch else None,
            reason=require_non_empty(patch["reason"], "reason") if "reason" in patch else None,
            status=require_choice(patch["status"], LeaveStatus, "status") if "status" in patch else None,
            comments=optional_text(patch.get("comments"), "comments"),
            touches_fields=any(k in patch for k in EDITABLE_FIELDS),
            sets_status="status" in patch,
            sets_comments="comments" in patch,
        )

    def update(self, actor: User, leave_id: int, patch: Any) -> LeaveRequest:
        p = self.parse_patch(patch)
        if (p.sets_status or p.sets_comments) and not actor.is_admin:
            raise AuthorizationError("Not authorized to update leave status")

        leave = self._get(leave_id)
        if leave.user_id != actor.user_id and not actor.is_admin:
            raise AuthorizationError("Not authorized to update this leave request")
        # Field edits are judged against the state before this update.
        if p.touches_fields and not leave.is_pending:
            raise ValidationError("Cannot update a processed leave request")

        start = p.start_date or leave.start_date
        end = p.end_date or leave.end_date
        _check_range(start, end)

        status = p.status or leave.status
        approved_by = leave.approved_by
        if p.sets_status:
            approved_by = None if status == LeaveStatus.PENDING else actor.user_id

        if (p.start_date or p.end_date) and status != LeaveStatus.REJECTED:
            clash = self._leaves.find_overlapping(
                user_id=leave.user_id, start_date=start, end_date=end, exclude_leave_id=leave.leave_id
            )
            if clash:
                raise ConflictError("You already have a leave request that overlaps with these dates")

        updated = self._leaves.update(
            leave_id=leave.leave_id,
            leave_type=p.leave_type or leave.leave_type,
            start_date=start,
            end_date=end,
            reason=p.reason or leave.reason,
            status=status,
            approved_by=approved_by,
            comments=p.comments if p.sets_comments else leave.comments,
        )
        if updated is None:
            raise NotFoundError("Leave request not found")

        if p.sets_status:
            logger.info("leave %s set to %s by %s", leave_id, status.value, actor.user_id)
        return updated

    def decide(self, actor: User, leave_id: int, *, status: Any, comments: Any = None) -> LeaveRequest:
        """Admin approval/rejection; comments are optional."""
        if not actor.is_admin:
            raise AuthorizationError("Admin access required")
        patch: dict = {"status": status}
        if comments is not None:
            patch["comments"] = comments
        return self.update(actor, leave_id, patch)

    def delete(self, actor: User, leave_id: int) -> None:
        leave = self._get(leave_id)
        if leave.user_id != actor.user_id and not actor.is_admin:
            raise AuthorizationError("Not authorized to delete this leave request")
        if not leave.is_pending and not actor.is_admin:
            raise ValidationError("Cannot delete a processed leave request")

        if not self._leaves.delete(leave.leave_id):
            raise NotFoundError("Leave request not found")
        logger.info("leave %s deleted by %s", leave_id, actor.user_id)

    def _get(self, leave_id: int) -> LeaveRequest:
        leave = self._leaves.get_by_id(leave_id)
        if leave is None:
            raise NotFoundError("Leave request not found")
        return leave
