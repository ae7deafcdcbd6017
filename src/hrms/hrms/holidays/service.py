from __future__ import annotations

from typing import Any, Mapping

from ..common.datetime_utils import parse_date_field
from ..common.validators import as_bool, optional_str, require_non_empty
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from ..core.permissions import PEOPLE_ADMINS, require_role
from .repository import HolidayRepository


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def list_holidays(self):
        return self._holidays.list_all()

    def _fields(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "name": require_non_empty(data.get("name"), "Name"),
            "holiday_date": parse_date_field(data.get("date") or data.get("holiday_date"), "Date"),
            "type": require_non_empty(data.get("type"), "Type"),
            "description": optional_str(data.get("description")),
            "is_recurring": as_bool(data.get("is_recurring")),
        }

    def add_holiday(self, *, current_role: Role, data: Mapping[str, Any]) -> int:
        require_role(current_role, PEOPLE_ADMINS)
        return self._holidays.create(**self._fields(data))

    def edit_holiday(self, *, current_role: Role, holiday_id: int, data: Mapping[str, Any]) -> None:
        require_role(current_role, PEOPLE_ADMINS)
        if not self._holidays.get_by_id(holiday_id):
            raise NotFoundError("Holiday not found")
        self._holidays.update(holiday_id, **self._fields(data))

    def delete_holiday(self, *, current_role: Role, holiday_id: int) -> None:
        require_role(current_role, PEOPLE_ADMINS)
        if not self._holidays.delete_by_id(holiday_id):
            raise NotFoundError("Holiday not found")
