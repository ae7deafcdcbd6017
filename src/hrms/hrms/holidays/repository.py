from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def list_all(self) -> Sequence[Holiday]:
        raise NotImplementedError

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        holiday_date: date,
        type: str,
        description: Optional[str],
        is_recurring: bool,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        holiday_id: int,
        *,
        name: str,
        holiday_date: date,
        type: str,
        description: Optional[str],
        is_recurring: bool,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, holiday_id: int) -> bool:
        raise NotImplementedError
