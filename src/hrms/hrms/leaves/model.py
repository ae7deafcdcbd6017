from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Tuple

from ..common.refs import EmployeeRef
from ..core.enums import ApprovalStatus, LeaveType


@dataclass(frozen=True)
class Leave:
    leave_id: int
    employee_id: int
    start_date: date
    start_time: time
    end_date: date
    end_time: time
    reason: str
    type: LeaveType
    days: float
    status: ApprovalStatus
    applied_to: Tuple[int, ...]
    approved_by: Optional[str] = None
    rejected_by: Optional[str] = None
    ror: Optional[str] = None
    employee: Optional[EmployeeRef] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class LeaveRequest:
    """Validated input for applying or editing a leave."""

    start_date: date
    start_time: time
    end_date: date
    end_time: time
    reason: str
    type: LeaveType
    days: float
    applied_to: Tuple[int, ...]
