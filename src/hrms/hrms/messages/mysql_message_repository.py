from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..employees.mysql_refs import EMPLOYEE_REF_COLUMNS, employee_ref_from_row, employee_ref_join
from .model import Message
from .repository import MessageRepository

_SELECT = f"""
    SELECT m.message_id, m.employee_id, m.department_id, m.subject, m.priority, m.message,
           m.reply, m.created_at, {EMPLOYEE_REF_COLUMNS}
    FROM messages m
    {employee_ref_join("m")}
"""


def _to_message(row: Mapping[str, Any]) -> Message:
    return Message(
        message_id=int(row["message_id"]),
        employee_id=int(row["employee_id"]),
        department_id=int(row["department_id"]),
        subject=row["subject"],
        priority=row["priority"],
        message=row["message"],
        reply=row.get("reply"),
        employee=employee_ref_from_row(row),
        created_at=row.get("created_at"),
    )


class MySQLMessageRepository(MessageRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Message]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY m.created_at DESC, m.message_id DESC")
            return [_to_message(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[Message]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE m.employee_id=%s ORDER BY m.created_at DESC, m.message_id DESC",
                (int(employee_id),),
            )
            return [_to_message(r) for r in fetchall(cur)]

    def get_by_id(self, message_id: int) -> Optional[Message]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE m.message_id=%s", (int(message_id),))
            row = fetchone(cur)
            return _to_message(row) if row else None

    def create(self, *, employee_id: int, department_id: int, subject: str, priority: str, message: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO messages(employee_id, department_id, subject, priority, message)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(employee_id), int(department_id), subject, priority, message),
            )
            return int(cur.lastrowid)

    def update(self, message_id: int, *, subject: str, priority: str, message: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE messages SET subject=%s, priority=%s, message=%s WHERE message_id=%s",
                (subject, priority, message, int(message_id)),
            )
            return cur.rowcount >= 0

    def set_reply(self, message_id: int, *, reply: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE messages SET reply=%s WHERE message_id=%s", (reply, int(message_id)))
            return cur.rowcount >= 0

    def delete_by_id(self, message_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM messages WHERE message_id=%s", (int(message_id),))
            return cur.rowcount > 0
