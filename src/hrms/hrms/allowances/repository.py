from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AllowanceKind, ApprovalStatus
from .model import Allowance, AllowanceDraft


class AllowanceRepository(Protocol):
    kind: AllowanceKind

    def list_all(self) -> Sequence[Allowance]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[Allowance]:
        raise NotImplementedError

    def get_by_id(self, allowance_id: int) -> Optional[Allowance]:
        raise NotImplementedError

    def find_matching(self, draft: AllowanceDraft) -> Optional[Allowance]:
        """Record with the same employee, client, project, month, year and type."""

        raise NotImplementedError

    def create(self, draft: AllowanceDraft, *, status: ApprovalStatus, added_by: Optional[str]) -> int:
        raise NotImplementedError

    def update(self, allowance_id: int, draft: AllowanceDraft) -> bool:
        raise NotImplementedError

    def add_amount(self, allowance_id: int, *, amount: float, status: ApprovalStatus) -> bool:
        raise NotImplementedError

    def set_status(self, allowance_id: int, *, status: ApprovalStatus) -> bool:
        raise NotImplementedError

    def set_voucher(self, allowance_id: int, *, voucher_no: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, allowance_id: int) -> bool:
        raise NotImplementedError
