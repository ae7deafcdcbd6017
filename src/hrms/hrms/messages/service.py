from __future__ import annotations

from typing import Any, Mapping

from ..common.validators import require_int, require_non_empty
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from ..core.permissions import PEOPLE_ADMINS, require_role
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import Message
from .repository import MessageRepository


class MessageService:
    def __init__(self, messages: MessageRepository, employees: EmployeeRepository):
        self._messages = messages
        self._employees = employees

    def _employee_for_user(self, user_id: int) -> Employee:
        employee = self._employees.get_by_user_id(user_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def list_messages(self):
        return self._messages.list_all()

    def list_for_user(self, user_id: int):
        return self._messages.list_for_employee(self._employee_for_user(user_id).employee_id)

    def get_message(self, message_id: int) -> Message:
        message = self._messages.get_by_id(message_id)
        if not message:
            raise NotFoundError("Message not found")
        return message

    def send_message(self, *, user_id: int, data: Mapping[str, Any]) -> int:
        employee = self._employee_for_user(user_id)
        department_id = data.get("department_id")
        return self._messages.create(
            employee_id=employee.employee_id,
            department_id=require_int(department_id, "Department") if department_id else employee.department_id,
            subject=require_non_empty(data.get("subject"), "Subject"),
            priority=require_non_empty(data.get("priority"), "Priority"),
            message=require_non_empty(data.get("message"), "Message"),
        )

    def edit_message(self, *, message_id: int, data: Mapping[str, Any]) -> None:
        self.get_message(message_id)
        self._messages.update(
            message_id,
            subject=require_non_empty(data.get("subject"), "Subject"),
            priority=require_non_empty(data.get("priority"), "Priority"),
            message=require_non_empty(data.get("message"), "Message"),
        )

    def delete_message(self, *, message_id: int) -> None:
        if not self._messages.delete_by_id(message_id):
            raise NotFoundError("Message not found")

    def reply(self, *, current_role: Role, message_id: int, reply: str) -> None:
        require_role(current_role, PEOPLE_ADMINS)
        self.get_message(message_id)
        self._messages.set_reply(message_id, reply=require_non_empty(reply, "Reply"))
