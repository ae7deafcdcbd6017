from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import NotificationPriority


@dataclass(frozen=True)
class Notification:
    notification_id: int
    subject: str
    message: str
    priority: NotificationPriority = NotificationPriority.NORMAL
    created_at: Optional[datetime] = None
