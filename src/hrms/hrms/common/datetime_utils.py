from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Optional

from ..core.constants import MONTHS
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_date_field(value: Any, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raw = (value or "").strip() if isinstance(value, str) else ""
    try:
        # Accept full ISO timestamps from JS clients ("2025-01-02T00:00:00.000Z").
        return parse_iso_date(raw[:10])
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def parse_optional_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_date_field(value, field_name)


def parse_hhmm(value: Any, field_name: str, *, default: Optional[time] = None) -> Optional[time]:
    if isinstance(value, time):
        return value
    v = (value or "").strip() if isinstance(value, str) else ""
    if not v:
        return default
    try:
        return datetime.strptime(v[:5], "%H:%M").time()
    except ValueError:
        raise ValidationError(f"{field_name} must be a time (HH:MM)")


def month_index(month: str) -> int:
    """1-based calendar position of a month name, 0 when unknown."""
    try:
        return MONTHS.index(month) + 1
    except ValueError:
        return 0


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
