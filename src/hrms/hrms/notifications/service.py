from __future__ import annotations

from typing import Any, Mapping

from ..common.validators import require_enum, require_non_empty
from ..core.enums import NotificationPriority, Role
from ..core.permissions import PEOPLE_ADMINS, require_role
from .repository import NotificationRepository


class NotificationService:
    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def list_notifications(self):
        return self._notifications.list_all()

    def add_notification(self, *, current_role: Role, data: Mapping[str, Any]) -> int:
        require_role(current_role, PEOPLE_ADMINS)
        return self._notifications.create(
            subject=require_non_empty(data.get("subject"), "Subject"),
            message=require_non_empty(data.get("message"), "Message"),
            priority=require_enum(data.get("priority") or NotificationPriority.NORMAL, NotificationPriority, "Priority"),
        )
