from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_TOKEN_TTL_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .users.guards import Guards, build_guards
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    """Application context handed to every controller's ``register``."""

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository

    token_service: TokenService
    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    leave_service: LeaveService
    guards: Guards

    health_check: Callable[[], bool]
    conn: Optional[DatabaseConnection] = None


def assemble_container(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    token_secret: str,
    token_ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
    clock: Optional[Callable[[], datetime]] = None,
    health_check: Optional[Callable[[], bool]] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""

    token_service = TokenService(token_secret, ttl_minutes=token_ttl_minutes)
    auth_service = AuthService(users_repo, token_service)

    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        token_service=token_service,
        auth_service=auth_service,
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(attendance_repo, clock=clock),
        leave_service=LeaveService(leaves_repo),
        guards=build_guards(auth_service),
        health_check=health_check or (lambda: True),
        conn=conn,
    )


def build_container(*, db_config: dict, token_secret: str, token_ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return assemble_container(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        token_secret=token_secret,
        token_ttl_minutes=token_ttl_minutes,
        health_check=conn.ping,
        conn=conn,
    )
