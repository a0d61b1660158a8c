from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Callable

from flask import g

from ..common.http import bearer_token
from ..core.exceptions import AuthorizationError
from .model import User
from .service import AuthService


def current_user() -> User:
    return g.current_user


@dataclass(frozen=True)
class Guards:
    login_required: Callable
    admin_required: Callable


def build_guards(auth_service: AuthService) -> Guards:
    """Route decorators resolving the bearer token before the view runs."""

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_user = auth_service.resolve_token(bearer_token())
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = auth_service.resolve_token(bearer_token())
            if not user.is_admin:
                raise AuthorizationError("Admin access required")
            g.current_user = user
            return view(*args, **kwargs)

        return wrapper

    return Guards(login_required=login_required, admin_required=admin_required)
