from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.validators import optional_str, require_int, require_month, require_non_empty, require_number, require_year
from ..core.enums import AllowanceKind, ApprovalStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import ALLOWANCE_APPROVERS, PAYROLL_EDITORS, require_role
from ..core.workflow import ensure_transition, parse_action
from ..employees.repository import EmployeeRepository
from .model import Allowance, AllowanceDraft
from .repository import AllowanceRepository

logger = logging.getLogger(__name__)


class AllowanceService:
    """Use case: variable or fixed allowances, depending on the repository's kind.

    Variable allowances start pending and need approval; fixed allowances are
    approved when added.
    """

    def __init__(self, allowances: AllowanceRepository, employees: EmployeeRepository):
        self._allowances = allowances
        self._employees = employees

    @property
    def kind(self) -> AllowanceKind:
        return self._allowances.kind

    @property
    def _initial_status(self) -> ApprovalStatus:
        if self.kind == AllowanceKind.FIXED:
            return ApprovalStatus.APPROVED
        return ApprovalStatus.PENDING

    def list_allowances(self):
        return self._allowances.list_all()

    def list_for_user(self, user_id: int):
        employee = self._employees.get_by_user_id(user_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return self._allowances.list_for_employee(employee.employee_id)

    def get_allowance(self, allowance_id: int) -> Allowance:
        allowance = self._allowances.get_by_id(allowance_id)
        if not allowance:
            raise NotFoundError("Allowance not found")
        return allowance

    def _parse(self, data: Mapping[str, Any]) -> AllowanceDraft:
        employee_id = require_int(data.get("employee_id"), "Employee")
        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee does not exist")

        return AllowanceDraft(
            employee_id=employee_id,
            client=optional_str(data.get("client")) or "",
            project_no=optional_str(data.get("project_no")) or "",
            allowance_month=require_month(data.get("allowance_month"), "Allowance month"),
            allowance_year=require_year(data.get("allowance_year"), "Allowance year"),
            allowance_type=require_non_empty(data.get("allowance_type"), "Allowance type"),
            allowance_amount=require_number(data.get("allowance_amount"), "Allowance amount", minimum=0),
        )

    def add_allowance(self, *, current_role: Role, added_by: Optional[str], data: Mapping[str, Any]) -> int:
        """Add an allowance, or add its amount onto a matching record.

        A merged variable allowance goes back to pending so the extra amount is reviewed.
        """

        require_role(current_role, PAYROLL_EDITORS)
        draft = self._parse(data)

        existing = self._allowances.find_matching(draft)
        if existing:
            self._allowances.add_amount(
                existing.allowance_id, amount=draft.allowance_amount, status=self._initial_status
            )
            logger.info(
                "%s allowance %s increased by %.2f", self.kind.value, existing.allowance_id, draft.allowance_amount
            )
            return existing.allowance_id

        return self._allowances.create(draft, status=self._initial_status, added_by=added_by)

    def update_allowance(self, *, current_role: Role, allowance_id: int, data: Mapping[str, Any]) -> None:
        require_role(current_role, PAYROLL_EDITORS)
        self.get_allowance(allowance_id)
        self._allowances.update(allowance_id, self._parse(data))

    def delete_allowance(self, *, current_role: Role, allowance_id: int) -> None:
        require_role(current_role, PAYROLL_EDITORS)
        if not self._allowances.delete_by_id(allowance_id):
            raise NotFoundError("Allowance not found")

    def set_voucher(self, *, current_role: Role, allowance_id: int, voucher_no: str) -> None:
        require_role(current_role, PAYROLL_EDITORS)
        self.get_allowance(allowance_id)
        self._allowances.set_voucher(allowance_id, voucher_no=require_non_empty(voucher_no, "Voucher number"))

    def decide(self, *, current_role: Role, allowance_id: int, action: str) -> ApprovalStatus:
        if self.kind != AllowanceKind.VARIABLE:
            raise ValidationError("Fixed allowances do not need approval")
        require_role(current_role, ALLOWANCE_APPROVERS)

        target = parse_action(action)
        allowance = self.get_allowance(allowance_id)
        ensure_transition(allowance.status, target)

        self._allowances.set_status(allowance_id, status=target)
        logger.info("Allowance %s %s", allowance_id, target.value)
        return target
