from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..core.constants import MS_PER_HOUR, TOTAL_HOURS_DECIMALS
from ..core.exceptions import ValidationError

_QUANTUM = Decimal(1).scaleb(-TOTAL_HOURS_DECIMALS)


def compute_total_hours(check_in: datetime, check_out: Optional[datetime]) -> Optional[float]:
    """Worked hours between check-in and check-out, rounded half-up to 2 decimals.

    Returns None while the session is open so the derived field stays absent
    exactly when ``check_out`` is absent.
    """

    if check_out is None:
        return None
    if check_out < check_in:
        raise ValidationError("Check-out time cannot be earlier than check-in time")

    delta = check_out - check_in
    elapsed_ms = (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000
    hours = Decimal(elapsed_ms) / Decimal(MS_PER_HOUR)
    return float(hours.quantize(_QUANTUM, rounding=ROUND_HALF_UP))
