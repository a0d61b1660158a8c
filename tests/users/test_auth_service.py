from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from werkzeug.security import generate_password_hash

from src.attendance_api.attendance_api.core.enums import Role
from src.attendance_api.attendance_api.core.exceptions import AuthenticationError, ConflictError, ValidationError
from src.attendance_api.attendance_api.users.service import AuthService
from src.attendance_api.attendance_api.users.tokens import TokenService
from tests.fakes import InMemoryUsers, make_user


@pytest.fixture
def tokens() -> TokenService:
    return TokenService("unit-secret", ttl_minutes=30)


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers([make_user(1, password_hash=generate_password_hash("right-pw"), email="a@example.com")])


@pytest.fixture
def auth(users, tokens) -> AuthService:
    return AuthService(users, tokens)


def test_register_creates_employee_and_token(auth, tokens):
    result = auth.register(name=" Carol ", email="Carol@Example.com", password="hunter22", department="Ops")

    assert result.user.role == Role.EMPLOYEE
    assert result.user.name == "Carol"
    assert result.user.email == "carol@example.com"
    assert result.user.password_hash != "hunter22"
    assert tokens.verify(result.token).user_id == result.user.user_id


def test_register_duplicate_email(auth):
    with pytest.raises(ConflictError):
        auth.register(name="A again", email="A@example.com", password="whatever1")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "email": "x@example.com", "password": "secret1"},
        {"name": "X", "email": "not-an-email", "password": "secret1"},
        {"name": "X", "email": "x@example.com", "password": "short"},
        {"name": "X", "email": "x@example.com", "password": None},
    ],
)
def test_register_validates_input(auth, kwargs):
    with pytest.raises(ValidationError):
        auth.register(**kwargs)


def test_authenticate_wrong_password_raises(auth):
    with pytest.raises(AuthenticationError):
        auth.authenticate("a@example.com", "wrong")


def test_authenticate_unknown_email_raises(auth):
    with pytest.raises(AuthenticationError):
        auth.authenticate("nobody@example.com", "right-pw")


def test_authenticate_returns_token_for_user(auth):
    result = auth.authenticate("a@example.com", "right-pw")

    assert auth.resolve_token(result.token).user_id == 1


def test_resolve_token_requires_a_token(auth):
    with pytest.raises(AuthenticationError):
        auth.resolve_token(None)


def test_resolve_token_rejects_foreign_signature(auth, users):
    forged = TokenService("other-secret").issue(users.get_by_id(1))

    with pytest.raises(AuthenticationError):
        auth.resolve_token(forged)


def test_expired_token_is_rejected(users):
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    issuer = TokenService("unit-secret", ttl_minutes=30, clock=lambda: past)
    auth = AuthService(users, TokenService("unit-secret"))

    with pytest.raises(AuthenticationError, match="expired"):
        auth.resolve_token(issuer.issue(users.get_by_id(1)))


def test_token_for_deleted_user_is_rejected(auth, tokens):
    ghost = make_user(42)

    with pytest.raises(AuthenticationError):
        auth.resolve_token(tokens.issue(ghost))


def test_token_with_bad_payload(tokens):
    token = jwt.encode({"sub": "abc", "role": "admin"}, "unit-secret", algorithm="HS256")

    with pytest.raises(AuthenticationError):
        tokens.verify(token)
