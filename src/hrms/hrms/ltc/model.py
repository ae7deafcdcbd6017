from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.refs import EmployeeRef
from ..core.enums import ApprovalStatus


@dataclass(frozen=True)
class LtcDraft:
    employee_id: int
    department_id: int
    service_completion_from: date
    service_completion_to: date
    leave_period_from: date
    leave_period_to: date
    reimbursement_amount: float


@dataclass(frozen=True)
class LtcClaim:
    """Leave Travel Concession reimbursement claim."""

    ltc_id: int
    employee_id: int
    department_id: int
    service_completion_from: date
    service_completion_to: date
    leave_period_from: date
    leave_period_to: date
    reimbursement_amount: float
    status: ApprovalStatus = ApprovalStatus.PENDING
    approved_by: Optional[str] = None
    remarks: Optional[str] = None
    employee: Optional[EmployeeRef] = None
    created_at: Optional[datetime] = None
