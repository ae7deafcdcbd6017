from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus
from ..employees.model import LeaveBalance
from .model import Leave, LeaveRequest


class LeaveRepository(Protocol):
    def list_all(self) -> Sequence[Leave]:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[Leave]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[Leave]:
        raise NotImplementedError

    def list_for_approver(self, approver_employee_id: int) -> Sequence[Leave]:
        raise NotImplementedError

    def create(self, *, employee_id: int, request: LeaveRequest) -> int:
        raise NotImplementedError

    def update(self, leave_id: int, *, request: LeaveRequest) -> bool:
        raise NotImplementedError

    def set_status(
        self,
        leave_id: int,
        *,
        status: ApprovalStatus,
        approved_by: Optional[str] = None,
        rejected_by: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def set_status_with_balance(
        self,
        leave_id: int,
        *,
        employee_id: int,
        balance: LeaveBalance,
        status: ApprovalStatus,
        approved_by: Optional[str] = None,
        rejected_by: Optional[str] = None,
    ) -> bool:
        """Write the employee balance and the leave status together."""
        raise NotImplementedError

    def set_ror(self, leave_id: int, *, ror: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, leave_id: int) -> bool:
        raise NotImplementedError
