from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account.

    Plain data object; holds no database access code.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    employee_id: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_public_dict(self) -> dict:
        """Serializable view; never includes the password hash."""
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "employeeId": self.employee_id,
            "department": self.department,
            "position": self.position,
            "isActive": self.is_active,
            "createdAt": isoformat(self.created_at),
        }


@dataclass(frozen=True)
class UserSummary:
    """Owner details embedded in admin listings."""

    user_id: int
    name: str
    email: str
    employee_id: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "employeeId": self.employee_id,
            "department": self.department,
            "position": self.position,
        }
