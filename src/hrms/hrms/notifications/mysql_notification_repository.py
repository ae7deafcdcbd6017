from __future__ import annotations

from typing import Sequence

from ..core.enums import NotificationPriority
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Notification
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT notification_id, subject, message, priority, created_at
                FROM notifications
                ORDER BY created_at DESC, notification_id DESC
                """
            )
            return [
                Notification(
                    notification_id=int(r["notification_id"]),
                    subject=r["subject"],
                    message=r["message"],
                    priority=NotificationPriority(r["priority"]),
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]

    def create(self, *, subject: str, message: str, priority: NotificationPriority) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO notifications(subject, message, priority) VALUES(%s,%s,%s)",
                (subject, message, priority.value),
            )
            return int(cur.lastrowid)
