from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.refs import EmployeeRef
from ..core.enums import AllowanceKind, ApprovalStatus


@dataclass(frozen=True)
class AllowanceDraft:
    employee_id: int
    client: str
    project_no: str
    allowance_month: str
    allowance_year: str
    allowance_type: str
    allowance_amount: float

    def merge_key(self) -> tuple:
        return (
            self.employee_id,
            self.client,
            self.project_no,
            self.allowance_month,
            self.allowance_year,
            self.allowance_type,
        )


@dataclass(frozen=True)
class Allowance:
    """A variable or fixed allowance record; both kinds share one shape."""

    allowance_id: int
    kind: AllowanceKind
    employee_id: int
    client: str
    project_no: str
    allowance_month: str
    allowance_year: str
    allowance_type: str
    allowance_amount: float
    status: ApprovalStatus
    voucher_no: str = ""
    added_by: Optional[str] = None
    employee: Optional[EmployeeRef] = None
    created_at: Optional[datetime] = None
