from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        employee_id: Optional[str],
        department: Optional[str],
        position: Optional[str],
    ) -> User:
        """Insert a user; raises ConflictError when the email is taken."""

        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        """All users ordered by name."""

        raise NotImplementedError

    def count_by_role(self, role: Role) -> int:
        raise NotImplementedError
