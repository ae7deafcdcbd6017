from __future__ import annotations

import random
from typing import Callable

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import PEOPLE_ADMINS, require_role
from ..employees.repository import EmployeeRepository
from .model import HelpTicket
from .repository import HelpdeskRepository

_MAX_ID_ATTEMPTS = 10


def generate_help_id() -> str:
    """'H' followed by six digits."""
    return f"H{random.randint(100000, 999999)}"


class HelpdeskService:
    def __init__(
        self,
        tickets: HelpdeskRepository,
        employees: EmployeeRepository,
        id_factory: Callable[[], str] = generate_help_id,
    ):
        self._tickets = tickets
        self._employees = employees
        self._id_factory = id_factory

    def list_tickets(self):
        return self._tickets.list_all()

    def list_for_user(self, user_id: int):
        employee = self._employees.get_by_user_id(user_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return self._tickets.list_for_employee(employee.employee_id)

    def _get(self, ticket_id: int) -> HelpTicket:
        ticket = self._tickets.get_by_id(ticket_id)
        if not ticket:
            raise NotFoundError("Query not found")
        return ticket

    def raise_query(self, *, user_id: int, query: str) -> str:
        query = require_non_empty(query, "Query")
        employee = self._employees.get_by_user_id(user_id)
        if not employee:
            raise NotFoundError("Employee not found")

        for _ in range(_MAX_ID_ATTEMPTS):
            help_id = self._id_factory()
            if not self._tickets.help_id_exists(help_id):
                break
        else:
            raise ValidationError("Could not allocate a help id, please retry")

        self._tickets.create(employee_id=employee.employee_id, help_id=help_id, query=query)
        return help_id

    def update_query(self, *, ticket_id: int, query: str) -> None:
        ticket = self._get(ticket_id)
        if ticket.resolved:
            raise ValidationError("A resolved query cannot be edited")
        self._tickets.update_query(ticket_id, query=require_non_empty(query, "Query"))

    def delete_ticket(self, *, ticket_id: int) -> None:
        if not self._tickets.delete_by_id(ticket_id):
            raise NotFoundError("Query not found")

    def resolve(self, *, current_role: Role, ticket_id: int) -> None:
        require_role(current_role, PEOPLE_ADMINS)
        self._get(ticket_id)
        self._tickets.set_resolved(ticket_id, resolved=True)

    def respond(self, *, current_role: Role, ticket_id: int, response: str) -> None:
        require_role(current_role, PEOPLE_ADMINS)
        self._get(ticket_id)
        self._tickets.respond(ticket_id, response=require_non_empty(response, "Response"))
