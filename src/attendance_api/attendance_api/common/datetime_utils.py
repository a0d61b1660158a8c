from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    """Parse an optional query/body date, accepting a full ISO timestamp too."""
    v = (value or "").strip()
    if not v:
        return None
    try:
        if len(v) == 10:
            return parse_iso_date(v)
        return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def now_local() -> datetime:
    """Current local time, truncated to whole seconds (the DATETIME column precision)."""
    return datetime.now().replace(microsecond=0)


def isoformat(value: Optional[datetime | date]) -> Optional[str]:
    return value.isoformat() if value is not None else None
