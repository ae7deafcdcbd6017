from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..employees.mysql_refs import EMPLOYEE_REF_COLUMNS, employee_ref_from_row, employee_ref_join
from .model import HelpTicket
from .repository import HelpdeskRepository

_SELECT = f"""
    SELECT h.ticket_id, h.employee_id, h.help_id, h.raised_at, h.query, h.response, h.resolved,
           {EMPLOYEE_REF_COLUMNS}
    FROM helpdesk_tickets h
    {employee_ref_join("h")}
"""


def _to_ticket(row: Mapping[str, Any]) -> HelpTicket:
    return HelpTicket(
        ticket_id=int(row["ticket_id"]),
        employee_id=int(row["employee_id"]),
        help_id=row["help_id"],
        raised_at=row["raised_at"],
        query=row["query"],
        response=row.get("response"),
        resolved=bool(row.get("resolved")),
        employee=employee_ref_from_row(row),
    )


class MySQLHelpdeskRepository(HelpdeskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[HelpTicket]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY h.raised_at DESC, h.ticket_id DESC")
            return [_to_ticket(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[HelpTicket]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE h.employee_id=%s ORDER BY h.raised_at DESC, h.ticket_id DESC",
                (int(employee_id),),
            )
            return [_to_ticket(r) for r in fetchall(cur)]

    def get_by_id(self, ticket_id: int) -> Optional[HelpTicket]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE h.ticket_id=%s", (int(ticket_id),))
            row = fetchone(cur)
            return _to_ticket(row) if row else None

    def help_id_exists(self, help_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM helpdesk_tickets WHERE help_id=%s", (help_id,))
            return fetchone(cur) is not None

    def create(self, *, employee_id: int, help_id: str, query: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO helpdesk_tickets(employee_id, help_id, query) VALUES(%s,%s,%s)",
                (int(employee_id), help_id, query),
            )
            return int(cur.lastrowid)

    def update_query(self, ticket_id: int, *, query: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE helpdesk_tickets SET query=%s WHERE ticket_id=%s", (query, int(ticket_id)))
            return cur.rowcount >= 0

    def set_resolved(self, ticket_id: int, *, resolved: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE helpdesk_tickets SET resolved=%s WHERE ticket_id=%s",
                (1 if resolved else 0, int(ticket_id)),
            )
            return cur.rowcount >= 0

    def respond(self, ticket_id: int, *, response: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE helpdesk_tickets SET response=%s, resolved=1 WHERE ticket_id=%s",
                (response, int(ticket_id)),
            )
            return cur.rowcount >= 0

    def delete_by_id(self, ticket_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM helpdesk_tickets WHERE ticket_id=%s", (int(ticket_id),))
            return cur.rowcount > 0
