from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Holiday
from .repository import HolidayRepository

_COLUMNS = "holiday_id, name, holiday_date, type, description, is_recurring, created_at"


def _to_holiday(row: Mapping[str, Any]) -> Holiday:
    return Holiday(
        holiday_id=int(row["holiday_id"]),
        name=row["name"],
        holiday_date=row["holiday_date"],
        type=row["type"],
        description=row.get("description"),
        is_recurring=bool(row.get("is_recurring")),
        created_at=row.get("created_at"),
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM holidays ORDER BY holiday_date")
            return [_to_holiday(r) for r in fetchall(cur)]

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM holidays WHERE holiday_id=%s", (int(holiday_id),))
            row = fetchone(cur)
            return _to_holiday(row) if row else None

    def create(
        self,
        *,
        name: str,
        holiday_date: date,
        type: str,
        description: Optional[str],
        is_recurring: bool,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO holidays(name, holiday_date, type, description, is_recurring)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, holiday_date, type, description, 1 if is_recurring else 0),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE holidays
                SET name=%s, holiday_date=%s, type=%s, description=%s, is_recurring=%s
                WHERE holiday_id=%s
                """,
                (name, holiday_date, type, description, 1 if is_recurring else 0, int(holiday_id)),
            )
            return cur.rowcount >= 0

    def delete_by_id(self, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE holiday_id=%s", (int(holiday_id),))
            return cur.rowcount > 0
