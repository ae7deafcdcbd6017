from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Holiday:
    holiday_id: int
    name: str
    holiday_date: date
    type: str
    description: Optional[str] = None
    is_recurring: bool = False
    created_at: Optional[datetime] = None
