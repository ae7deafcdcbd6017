"""Leave day computation from start/end date and time windows.

Office hours run 09:30-18:00 with a half-day cutoff at 13:30, so every
request resolves to a multiple of half a day.
"""

from __future__ import annotations

from datetime import date, time
from typing import Optional

from ..core.constants import HALF_DAY_CUTOFF, OFFICE_END, OFFICE_START
from ..core.exceptions import ValidationError


def compute_leave_days(
    start_date: date,
    end_date: date,
    start_time: Optional[time] = None,
    end_time: Optional[time] = None,
) -> float:
    start_time = start_time or OFFICE_START
    end_time = end_time or OFFICE_END

    if (end_date, end_time) < (start_date, start_time):
        raise ValidationError("Leave end must not be before its start")

    if start_date == end_date:
        if end_time <= HALF_DAY_CUTOFF:
            return 0.5
        return 1.0

    days = float((end_date - start_date).days + 1)
    if start_time > HALF_DAY_CUTOFF:
        days -= 0.5
    if end_time < HALF_DAY_CUTOFF:
        days -= 0.5
    return max(days, 0.0)
