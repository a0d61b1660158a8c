from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from ..core.constants import DEFAULT_TOKEN_TTL_MINUTES, JWT_ALGORITHM
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import User


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    role: Role
    email: str


class TokenService:
    """Issue and verify signed bearer tokens (HS256)."""

    def __init__(
        self,
        secret: str,
        *,
        ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._ttl = timedelta(minutes=int(ttl_minutes))
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def issue(self, user: User) -> str:
        now = self._clock()
        payload = {
            "sub": str(user.user_id),
            "role": user.role.value,
            "email": user.email,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.PyJWTError:
            raise AuthenticationError("Invalid token")

        try:
            return TokenClaims(
                user_id=int(payload["sub"]),
                role=Role(payload["role"]),
                email=str(payload.get("email", "")),
            )
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token payload")
