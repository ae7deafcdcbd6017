from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.refs import EmployeeRef


@dataclass(frozen=True)
class Message:
    """A message from an employee to HR; HR answers through ``reply``."""

    message_id: int
    employee_id: int
    department_id: int
    subject: str
    priority: str
    message: str
    reply: Optional[str] = None
    employee: Optional[EmployeeRef] = None
    created_at: Optional[datetime] = None
