from __future__ import annotations

from datetime import datetime

import pytest
from werkzeug.security import generate_password_hash

from src.attendance_api.attendance_api.container import assemble_container
from src.attendance_api.attendance_api.core.enums import Role
from src.attendance_api.attendance_api.main import create_app
from tests.fakes import FakeClock, InMemoryAttendance, InMemoryLeaves, InMemoryUsers, make_user


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 1, 9, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers(
        [
            make_user(1, role=Role.ADMIN, password_hash=generate_password_hash("admin123"), email="admin@example.com"),
            make_user(2, password_hash=generate_password_hash("secret1"), email="alice@example.com"),
            make_user(3, password_hash=generate_password_hash("secret2"), email="bob@example.com"),
        ]
    )


@pytest.fixture
def attendance_repo(users_repo) -> InMemoryAttendance:
    return InMemoryAttendance(users_repo)


@pytest.fixture
def leaves_repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def container(users_repo, attendance_repo, leaves_repo, clock):
    return assemble_container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        token_secret="test-jwt-secret",
        clock=clock,
    )


@pytest.fixture
def app(container):
    return create_app("config.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(container, users_repo):
    def _headers(user_id: int) -> dict:
        token = container.token_service.issue(users_repo.get_by_id(user_id))
        return {"Authorization": f"Bearer {token}"}

    return _headers
