from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class EmployeeRef:
    """Employee summary joined onto records that reference an employee."""

    employee_id: int
    emp_no: Optional[int] = None
    name: Optional[str] = None
    designation: Optional[str] = None
    department_id: Optional[int] = None
    department_name: Optional[str] = None
    dol: Optional[date] = None
