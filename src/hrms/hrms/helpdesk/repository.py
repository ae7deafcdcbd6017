from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import HelpTicket


class HelpdeskRepository(Protocol):
    def list_all(self) -> Sequence[HelpTicket]:
        """Newest first."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[HelpTicket]:
        raise NotImplementedError

    def get_by_id(self, ticket_id: int) -> Optional[HelpTicket]:
        raise NotImplementedError

    def help_id_exists(self, help_id: str) -> bool:
        raise NotImplementedError

    def create(self, *, employee_id: int, help_id: str, query: str) -> int:
        raise NotImplementedError

    def update_query(self, ticket_id: int, *, query: str) -> bool:
        raise NotImplementedError

    def set_resolved(self, ticket_id: int, *, resolved: bool) -> bool:
        raise NotImplementedError

    def respond(self, ticket_id: int, *, response: str) -> bool:
        """Store the response and mark the ticket resolved."""

        raise NotImplementedError

    def delete_by_id(self, ticket_id: int) -> bool:
        raise NotImplementedError
