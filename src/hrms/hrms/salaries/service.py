from __future__ import annotations

import logging
from typing import Any, Mapping, Tuple

from ..common.validators import require_int, require_month, require_non_empty, require_number, require_year
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import PAYROLL_EDITORS, require_role
from ..employees.repository import EmployeeRepository
from .model import LineItem, Salary, SalaryDraft
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


def parse_line_items(value: Any, field_name: str) -> Tuple[LineItem, ...]:
    """``[{"name": ..., "amount": ...}]``; rows with neither name nor amount are dropped."""

    if value is None or value == "":
        return ()
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{field_name} must be a list")

    items = []
    for raw in value:
        if not isinstance(raw, Mapping):
            raise ValidationError(f"{field_name} entries must be objects")
        name = str(raw.get("name") or "").strip()
        amount = raw.get("amount")
        if not name and amount in (None, ""):
            continue
        items.append(
            LineItem(
                name=require_non_empty(name, f"{field_name} name"),
                amount=require_number(amount, f"{field_name} amount", minimum=0),
            )
        )
    return tuple(items)


class SalaryService:
    """Use case: monthly salary records."""

    def __init__(self, salaries: SalaryRepository, employees: EmployeeRepository):
        self._salaries = salaries
        self._employees = employees

    def list_salaries(self):
        return [s.to_dict() for s in self._salaries.list_all()]

    def list_for_user(self, user_id: int):
        employee = self._employees.get_by_user_id(user_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return [s.to_dict() for s in self._salaries.list_for_employee(employee.employee_id)]

    def get_salary(self, salary_id: int) -> Salary:
        salary = self._salaries.get_by_id(salary_id)
        if not salary:
            raise NotFoundError("Salary not found")
        return salary

    def _parse(self, data: Mapping[str, Any]) -> SalaryDraft:
        employee_id = require_int(data.get("employee_id"), "Employee")
        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee does not exist")

        return SalaryDraft(
            employee_id=employee_id,
            employee_type=require_non_empty(data.get("employee_type"), "Employee type"),
            gross_salary=require_number(data.get("gross_salary"), "Gross salary", minimum=0),
            basic_salary=require_number(data.get("basic_salary"), "Basic salary", minimum=0),
            payable_days=require_number(data.get("payable_days"), "Payable days", minimum=0),
            allowances=parse_line_items(data.get("allowances"), "Allowance"),
            deductions=parse_line_items(data.get("deductions"), "Deduction"),
            payment_month=require_month(data.get("payment_month"), "Payment month"),
            payment_year=require_year(data.get("payment_year"), "Payment year"),
        )

    def _ensure_unique(self, draft: SalaryDraft, *, salary_id: int = 0) -> None:
        existing = self._salaries.find_for_period(
            employee_id=draft.employee_id,
            payment_month=draft.payment_month,
            payment_year=draft.payment_year,
        )
        if existing and existing.salary_id != salary_id:
            raise ValidationError(
                f"Salary for {draft.payment_month} {draft.payment_year} already exists for this employee"
            )

    def add_salary(self, *, current_role: Role, data: Mapping[str, Any]) -> int:
        require_role(current_role, PAYROLL_EDITORS)
        draft = self._parse(data)
        self._ensure_unique(draft)

        salary_id = self._salaries.create(draft)
        logger.info("Salary %s added for employee %s (%s %s)", salary_id, draft.employee_id, draft.payment_month, draft.payment_year)
        return salary_id

    def update_salary(self, *, current_role: Role, salary_id: int, data: Mapping[str, Any]) -> None:
        require_role(current_role, PAYROLL_EDITORS)
        self.get_salary(salary_id)
        draft = self._parse(data)
        self._ensure_unique(draft, salary_id=int(salary_id))
        self._salaries.update(salary_id, draft)

    def delete_salary(self, *, current_role: Role, salary_id: int) -> None:
        require_role(current_role, PAYROLL_EDITORS)
        if not self._salaries.delete_by_id(salary_id):
            raise NotFoundError("Salary not found")
