from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import NotificationPriority
from .model import Notification


class NotificationRepository(Protocol):
    def list_all(self) -> Sequence[Notification]:
        """Newest first."""

        raise NotImplementedError

    def create(self, *, subject: str, message: str, priority: NotificationPriority) -> int:
        raise NotImplementedError
