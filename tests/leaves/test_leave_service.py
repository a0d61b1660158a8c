from __future__ import annotations

from datetime import date

import pytest

from src.attendance_api.attendance_api.core.enums import LeaveStatus, LeaveType, Role
from src.attendance_api.attendance_api.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.attendance_api.attendance_api.leaves.service import LeaveService
from tests.fakes import InMemoryLeaves, make_user, sample_leave

ADMIN = make_user(1, role=Role.ADMIN)
ALICE = make_user(2)
BOB = make_user(3)


@pytest.fixture
def repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def svc(repo) -> LeaveService:
    return LeaveService(repo)


def _create(svc, actor=ALICE, start="2024-02-01", end="2024-02-03", kind="vacation", reason="Trip"):
    return svc.create(actor, leave_type=kind, start_date=start, end_date=end, reason=reason)


def test_create_pending_request(svc):
    leave = _create(svc)

    assert leave.status == LeaveStatus.PENDING
    assert leave.leave_type == LeaveType.VACATION
    assert leave.duration_days == 3
    assert leave.user_id == ALICE.user_id


@pytest.mark.parametrize(
    "kwargs",
    [
        {"kind": "holiday"},
        {"start": "02/01/2024"},
        {"start": None},
        {"start": "2024-02-05", "end": "2024-02-01"},
        {"reason": "   "},
    ],
)
def test_create_validates(svc, kwargs):
    with pytest.raises(ValidationError):
        _create(svc, **kwargs)


def test_create_rejects_overlap_with_active_request(svc):
    _create(svc, start="2024-02-01", end="2024-02-03")

    with pytest.raises(ConflictError):
        _create(svc, start="2024-02-03", end="2024-02-04")

    # Another user is unaffected.
    _create(svc, actor=BOB, start="2024-02-01", end="2024-02-03")


def test_rejected_request_does_not_block(svc, repo):
    repo.items[1] = sample_leave(1, ALICE.user_id, date(2024, 2, 1), date(2024, 2, 3), LeaveStatus.REJECTED)
    repo.next_id = 2

    leave = _create(svc, start="2024-02-02", end="2024-02-02")

    assert leave.leave_id == 2


def test_list_for_other_user_requires_admin(svc):
    _create(svc)

    with pytest.raises(AuthorizationError):
        svc.list_for_user(BOB, ALICE.user_id)
    assert len(svc.list_for_user(ADMIN, ALICE.user_id)) == 1
    assert len(svc.list_for_user(ALICE, ALICE.user_id)) == 1


def test_owner_can_edit_pending_fields(svc):
    leave = _create(svc)

    updated = svc.update(ALICE, leave.leave_id, {"reason": "Wedding", "endDate": "2024-02-05"})

    assert updated.reason == "Wedding"
    assert updated.duration_days == 5


def test_non_owner_cannot_edit(svc):
    leave = _create(svc)

    with pytest.raises(AuthorizationError):
        svc.update(BOB, leave.leave_id, {"reason": "mine now"})


def test_only_admin_sets_status(svc):
    leave = _create(svc)

    with pytest.raises(AuthorizationError):
        svc.update(ALICE, leave.leave_id, {"status": "approved"})

    approved = svc.update(ADMIN, leave.leave_id, {"status": "approved"})
    assert approved.status == LeaveStatus.APPROVED
    assert approved.approved_by == ADMIN.user_id


def test_processed_request_fields_are_frozen(svc):
    leave = _create(svc)
    svc.decide(ADMIN, leave.leave_id, status="approved", comments="enjoy")

    with pytest.raises(ValidationError):
        svc.update(ALICE, leave.leave_id, {"reason": "changed my mind"})


def test_edit_rejects_range_inversion(svc):
    leave = _create(svc)

    with pytest.raises(ValidationError):
        svc.update(ALICE, leave.leave_id, {"endDate": "2024-01-15"})


def test_decide_requires_admin_and_valid_status(svc):
    leave = _create(svc)

    with pytest.raises(AuthorizationError):
        svc.decide(ALICE, leave.leave_id, status="approved")
    with pytest.raises(ValidationError):
        svc.decide(ADMIN, leave.leave_id, status="maybe")

    rejected = svc.decide(ADMIN, leave.leave_id, status="rejected", comments="short staffed")
    assert rejected.status == LeaveStatus.REJECTED
    assert rejected.comments == "short staffed"


def test_delete_rules(svc):
    pending = _create(svc, start="2024-03-01", end="2024-03-01")
    processed = _create(svc, start="2024-04-01", end="2024-04-01")
    svc.decide(ADMIN, processed.leave_id, status="approved")

    with pytest.raises(AuthorizationError):
        svc.delete(BOB, pending.leave_id)
    with pytest.raises(ValidationError):
        svc.delete(ALICE, processed.leave_id)

    svc.delete(ALICE, pending.leave_id)
    svc.delete(ADMIN, processed.leave_id)
    assert svc.list_mine(ALICE) == []


def test_unknown_leave(svc):
    with pytest.raises(NotFoundError):
        svc.delete(ALICE, 404)
    with pytest.raises(NotFoundError):
        svc.update(ADMIN, 404, {"status": "approved"})


def test_list_all_requires_admin(svc):
    _create(svc)

    with pytest.raises(AuthorizationError):
        svc.list_all(ALICE)
    assert len(svc.list_all(ADMIN, status="pending")) == 1
    assert svc.list_all(ADMIN, status="approved") == []
    assert svc.count_pending() == 1
