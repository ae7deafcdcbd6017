from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.refs import EmployeeRef


@dataclass(frozen=True)
class HelpTicket:
    ticket_id: int
    employee_id: int
    help_id: str
    raised_at: datetime
    query: str
    response: Optional[str] = None
    resolved: bool = False
    employee: Optional[EmployeeRef] = None
