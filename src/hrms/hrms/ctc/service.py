from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..allowances.repository import AllowanceRepository
from ..common.datetime_utils import month_index
from ..common.validators import optional_str, require_month, require_year
from ..core.enums import ApprovalStatus, Role
from ..core.exceptions import NotFoundError
from ..core.permissions import CTC_VIEWERS, require_role
from ..employees.repository import EmployeeRepository
from ..salaries.repository import SalaryRepository
from .aggregation import filter_rows, merge_ctc, summarize
from .model import EmployeeCtcRow

logger = logging.getLogger(__name__)


class CtcService:
    """Use case: cost-to-company reports built from salaries and approved allowances."""

    def __init__(
        self,
        salaries: SalaryRepository,
        allowances: AllowanceRepository,
        fixed_allowances: AllowanceRepository,
        employees: EmployeeRepository,
    ):
        self._salaries = salaries
        self._allowances = allowances
        self._fixed_allowances = fixed_allowances
        self._employees = employees

    def build_report(
        self,
        *,
        current_role: Role,
        month: Optional[str] = None,
        year: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        require_role(current_role, CTC_VIEWERS)

        salaries = self._salaries.list_all()
        variable = self._allowances.list_all()
        fixed = self._fixed_allowances.list_all()
        rows = merge_ctc(salaries, variable, fixed)
        rows = filter_rows(rows, month=optional_str(month), year=optional_str(year), search=search)

        logger.info(
            "CTC report built: %d salaries, %d variable, %d fixed -> %d rows",
            len(salaries),
            len(variable),
            len(fixed),
            len(rows),
        )
        return {"rows": rows, "summary": summarize(rows)}

    def month_wise(self, *, current_role: Role, month: str, year: str) -> Dict[str, Any]:
        month = require_month(month)
        year = require_year(year)
        return self.build_report(current_role=current_role, month=month, year=year)

    def employee_wise(self, *, current_role: Role, emp_no: int) -> Dict[str, Any]:
        require_role(current_role, CTC_VIEWERS)

        employee = self._employees.get_by_emp_no(emp_no)
        if not employee:
            raise NotFoundError("Employee not found")
        salaries = self._salaries.list_for_employee(employee.employee_id)
        if not salaries:
            raise NotFoundError("No salary records found")

        def approved_total(repo: AllowanceRepository, month: str, year: str) -> float:
            return sum(
                a.allowance_amount
                for a in repo.list_for_employee(employee.employee_id)
                if a.status == ApprovalStatus.APPROVED and a.allowance_month == month and a.allowance_year == year
            )

        rows = []
        for salary in salaries:
            variable = approved_total(self._allowances, salary.payment_month, salary.payment_year)
            fixed = approved_total(self._fixed_allowances, salary.payment_month, salary.payment_year)
            rows.append(
                EmployeeCtcRow(
                    month=salary.payment_month,
                    year=salary.payment_year,
                    gross_salary=salary.gross_salary,
                    salary_total=salary.total,
                    variable_allowances=variable,
                    fixed_allowances=fixed,
                    net_ctc=salary.gross_salary + fixed + variable,
                )
            )
        rows.sort(key=lambda r: (r.year, month_index(r.month)), reverse=True)

        return {
            "employee": {
                "emp_no": employee.emp_no,
                "name": employee.name,
                "department": employee.department_name or "Unknown",
            },
            "rows": rows,
        }
