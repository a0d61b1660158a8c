from __future__ import annotations

from datetime import datetime

from src.attendance_api.attendance_api.container import assemble_container
from src.attendance_api.attendance_api.main import create_app

ADMIN, ALICE, BOB = 1, 2, 3


def _request_leave(client, headers, start="2024-02-01", end="2024-02-02"):
    return client.post(
        "/api/leaves",
        json={"leaveType": "sick", "startDate": start, "endDate": end, "reason": "Flu"},
        headers=headers,
    )


def test_leave_lifecycle(client, auth_headers):
    resp = _request_leave(client, auth_headers(ALICE))
    assert resp.status_code == 201
    leave = resp.get_json()
    assert leave["status"] == "pending"
    assert leave["duration"] == 2

    mine = client.get("/api/leaves/me", headers=auth_headers(ALICE)).get_json()
    assert [lv["id"] for lv in mine] == [leave["id"]]

    resp = client.put(f"/api/leaves/{leave['id']}", json={"reason": "Flu, doctor's note"}, headers=auth_headers(ALICE))
    assert resp.status_code == 200
    assert resp.get_json()["reason"] == "Flu, doctor's note"

    resp = client.delete(f"/api/leaves/{leave['id']}", headers=auth_headers(ALICE))
    assert resp.status_code == 200
    assert client.get("/api/leaves/me", headers=auth_headers(ALICE)).get_json() == []


def test_overlapping_leave_is_conflict(client, auth_headers):
    _request_leave(client, auth_headers(ALICE))

    resp = _request_leave(client, auth_headers(ALICE), start="2024-02-02", end="2024-02-05")

    assert resp.status_code == 409


def test_other_users_leaves_are_private(client, auth_headers):
    leave = _request_leave(client, auth_headers(ALICE)).get_json()

    assert client.get(f"/api/leaves/employee/{ALICE}", headers=auth_headers(BOB)).status_code == 403
    assert client.put(f"/api/leaves/{leave['id']}", json={"reason": "x"}, headers=auth_headers(BOB)).status_code == 403
    assert client.delete(f"/api/leaves/{leave['id']}", headers=auth_headers(BOB)).status_code == 403
    assert client.get(f"/api/leaves/employee/{ALICE}", headers=auth_headers(ADMIN)).status_code == 200


def test_admin_decides_leave(client, auth_headers):
    leave = _request_leave(client, auth_headers(ALICE)).get_json()

    assert client.get("/api/admin/leaves", headers=auth_headers(ALICE)).status_code == 403

    pending = client.get("/api/admin/leaves?status=pending", headers=auth_headers(ADMIN)).get_json()
    assert [lv["id"] for lv in pending] == [leave["id"]]

    resp = client.put(
        f"/api/admin/leaves/{leave['id']}",
        json={"status": "approved", "comments": "get well"},
        headers=auth_headers(ADMIN),
    )
    assert resp.status_code == 200
    decided = resp.get_json()
    assert decided["status"] == "approved"
    assert decided["approvedBy"] == ADMIN

    resp = client.put(f"/api/leaves/{leave['id']}", json={"reason": "late edit"}, headers=auth_headers(ALICE))
    assert resp.status_code == 400


def test_admin_summary_and_employees(client, clock, auth_headers):
    clock.now = datetime(2024, 1, 1, 9, 0)
    client.post("/api/attendance/checkin", json={}, headers=auth_headers(ALICE))
    _request_leave(client, auth_headers(BOB))

    summary = client.get("/api/admin/summary", headers=auth_headers(ADMIN)).get_json()
    assert summary == {"totalEmployees": 2, "presentToday": 1, "pendingLeaves": 1}

    employees = client.get("/api/admin/employees", headers=auth_headers(ADMIN)).get_json()
    assert [e["id"] for e in employees] == [1, 2, 3]
    assert all("passwordHash" not in e for e in employees)


def test_admin_employee_attendance(client, clock, auth_headers):
    for day in (1, 2):
        clock.now = datetime(2024, 1, day, 9, 0)
        client.post("/api/attendance/checkin", json={}, headers=auth_headers(ALICE))

    rows = client.get(
        f"/api/admin/attendance/{ALICE}?startDate=2024-01-02&endDate=2024-01-02",
        headers=auth_headers(ADMIN),
    ).get_json()

    assert [r["date"] for r in rows] == ["2024-01-02"]
    assert client.get(f"/api/admin/attendance/{ALICE}", headers=auth_headers(BOB)).status_code == 403


def test_health(client, container):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "database": "up"}


def test_health_reports_database_down(users_repo, attendance_repo, leaves_repo):
    down = assemble_container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        token_secret="test-jwt-secret",
        health_check=lambda: False,
    )
    client = create_app("config.testing", container=down).test_client()

    resp = client.get("/api/health")

    assert resp.status_code == 503
    assert resp.get_json() == {"status": "degraded", "database": "down"}
