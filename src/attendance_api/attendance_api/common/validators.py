from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def optional_text(value: Any, field_name: str) -> Optional[str]:
    """Accept None or a string; blank strings normalize to None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value.strip() or None


def require_choice(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def reject_unknown_fields(payload: dict, allowed: Iterable[str]) -> None:
    unknown = sorted(set(payload) - set(allowed))
    if unknown:
        raise ValidationError(f"Unsupported field(s): {', '.join(unknown)}")
