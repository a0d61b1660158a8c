from __future__ import annotations


def test_register_login_and_me(client):
    resp = client.post(
        "/api/auth/register",
        json={"name": "Dana", "email": "dana@example.com", "password": "dana-pass", "employeeId": "EMP-0100"},
    )
    assert resp.status_code == 201
    registered = resp.get_json()
    assert registered["user"]["role"] == "employee"
    assert "passwordHash" not in registered["user"]
    assert "password_hash" not in registered["user"]

    resp = client.post("/api/auth/login", json={"email": "dana@example.com", "password": "dana-pass"})
    assert resp.status_code == 200
    token = resp.get_json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"}).get_json()
    assert me["email"] == "dana@example.com"
    assert me["employeeId"] == "EMP-0100"


def test_register_cannot_pick_role(client):
    resp = client.post(
        "/api/auth/register",
        json={"name": "Eve", "email": "eve@example.com", "password": "eve-pass", "role": "admin"},
    )

    assert resp.get_json()["user"]["role"] == "employee"


def test_register_duplicate_email_is_conflict(client):
    resp = client.post(
        "/api/auth/register",
        json={"name": "Alice 2", "email": "alice@example.com", "password": "whatever"},
    )

    assert resp.status_code == 409
    assert resp.get_json()["error"] == "conflict"


def test_login_with_wrong_password(client):
    resp = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "unauthorized", "message": "Invalid email or password"}


def test_login_with_missing_fields(client):
    resp = client.post("/api/auth/login", json={})

    assert resp.status_code == 401
