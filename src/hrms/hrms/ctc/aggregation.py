"""Merge salaries and approved allowances into per employee-month CTC rows."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from ..allowances.model import Allowance
from ..common.datetime_utils import month_index
from ..common.refs import EmployeeRef
from ..core.enums import AllowanceKind, ApprovalStatus
from ..salaries.model import Salary
from .model import CtcRow, CtcSummary

UNKNOWN = "Unknown"


def _emp_no(ref: Optional[EmployeeRef], employee_id: int) -> str:
    if ref and ref.emp_no is not None:
        return str(ref.emp_no)
    return str(employee_id)


def _has_left(ref: Optional[EmployeeRef]) -> bool:
    return bool(ref and ref.dol)


def _blank_row(ref: Optional[EmployeeRef], employee_id: int, month: str, year: str) -> CtcRow:
    emp_no = _emp_no(ref, employee_id)
    return CtcRow(
        key=f"{emp_no}_{month}_{year}",
        emp_no=emp_no,
        employee_name=(ref.name if ref else None) or UNKNOWN,
        department=(ref.department_name if ref else None) or UNKNOWN,
        month=month,
        year=str(year),
    )


def merge_ctc(
    salaries: Iterable[Salary],
    variable_allowances: Iterable[Allowance],
    fixed_allowances: Iterable[Allowance],
) -> List[CtcRow]:
    rows: Dict[str, CtcRow] = {}

    for salary in salaries:
        if _has_left(salary.employee):
            continue
        row = _blank_row(salary.employee, salary.employee_id, salary.payment_month, salary.payment_year)
        existing = rows.get(row.key, row)
        salary_total = salary.basic_salary + salary.total_allowances - salary.total_deductions
        rows[row.key] = replace(
            existing,
            gross_salary=salary.gross_salary or 0.0,
            basic_salary=salary.basic_salary or 0.0,
            salary_allowances=salary.total_allowances,
            salary_deductions=salary.total_deductions,
            total_ctc=salary_total + existing.variable_allowances + existing.fixed_allowances,
        )

    for allowance in [*variable_allowances, *fixed_allowances]:
        if allowance.status != ApprovalStatus.APPROVED or _has_left(allowance.employee):
            continue
        row = _blank_row(allowance.employee, allowance.employee_id, allowance.allowance_month, allowance.allowance_year)
        existing = rows.get(row.key, row)
        amount = allowance.allowance_amount or 0.0
        if allowance.kind == AllowanceKind.FIXED:
            existing = replace(existing, fixed_allowances=existing.fixed_allowances + amount)
        else:
            existing = replace(existing, variable_allowances=existing.variable_allowances + amount)
        rows[row.key] = replace(existing, total_ctc=existing.total_ctc + amount)

    return sort_rows(rows.values())


def sort_rows(rows: Iterable[CtcRow]) -> List[CtcRow]:
    """Newest year first, then latest month, then employee name."""

    by_name = sorted(rows, key=lambda r: r.employee_name)
    return sorted(by_name, key=lambda r: (r.year, month_index(r.month)), reverse=True)


def filter_rows(
    rows: Iterable[CtcRow],
    *,
    month: Optional[str] = None,
    year: Optional[str] = None,
    search: Optional[str] = None,
) -> List[CtcRow]:
    needle = (search or "").strip().lower()
    out = []
    for row in rows:
        if month and row.month != month:
            continue
        if year and row.year != str(year):
            continue
        if needle and not any(needle in v.lower() for v in (row.emp_no, row.employee_name, row.department)):
            continue
        out.append(row)
    return out


def summarize(rows: List[CtcRow]) -> CtcSummary:
    total_ctc = sum(r.total_ctc for r in rows)
    return CtcSummary(
        total_ctc=total_ctc,
        total_salary=sum(r.salary_total for r in rows),
        total_variable=sum(r.variable_allowances for r in rows),
        total_fixed=sum(r.fixed_allowances for r in rows),
        average_ctc=total_ctc / len(rows) if rows else 0.0,
        unique_employees=len({r.emp_no for r in rows}),
        total_records=len(rows),
    )
