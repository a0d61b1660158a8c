from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_text, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, ValidationError
from .model import User
from .repository import UserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class AuthResult:
    """What the login/register endpoints hand back to the client."""

    token: str
    user: User


class AuthService:
    """Use cases: register, login, resolve a bearer token to a user."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        employee_id: Optional[str] = None,
        department: Optional[str] = None,
        position: Optional[str] = None,
    ) -> AuthResult:
        name = require_non_empty(name, "name")
        email = require_non_empty(email, "email").lower()
        if not _EMAIL_RE.match(email):
            raise ValidationError("email is not a valid address")
        require_min_length(password, "password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ConflictError("Email is already registered")

        # Self-registration never grants admin.
        user = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.EMPLOYEE,
            employee_id=optional_text(employee_id, "employeeId"),
            department=optional_text(department, "department"),
            position=optional_text(position, "position"),
        )
        logger.info("registered user %s (%s)", user.user_id, user.email)
        return AuthResult(token=self._tokens.issue(user), user=user)

    def authenticate(self, email: str, password: str) -> AuthResult:
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid email or password")

        user = self._users.get_by_email(email.strip())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.warning("failed login for %s", user.email)
            raise AuthenticationError("Invalid email or password")

        return AuthResult(token=self._tokens.issue(user), user=user)

    def resolve_token(self, token: Optional[str]) -> User:
        """Map a bearer token to an active user or raise AuthenticationError."""
        if not token:
            raise AuthenticationError("No token, authorization denied")

        claims = self._tokens.verify(token)
        user = self._users.get_by_id(claims.user_id)
        if not user or not user.is_active:
            raise AuthenticationError("Token user no longer exists")
        return user


class UserService:
    """Use case: read accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_employees(self) -> Sequence[User]:
        return self._users.list_all()

    def count_employees(self) -> int:
        return self._users.count_by_role(Role.EMPLOYEE)
