from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Message


class MessageRepository(Protocol):
    def list_all(self) -> Sequence[Message]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[Message]:
        raise NotImplementedError

    def get_by_id(self, message_id: int) -> Optional[Message]:
        raise NotImplementedError

    def create(self, *, employee_id: int, department_id: int, subject: str, priority: str, message: str) -> int:
        raise NotImplementedError

    def update(self, message_id: int, *, subject: str, priority: str, message: str) -> bool:
        raise NotImplementedError

    def set_reply(self, message_id: int, *, reply: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, message_id: int) -> bool:
        raise NotImplementedError
