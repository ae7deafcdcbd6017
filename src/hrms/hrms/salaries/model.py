from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..common.refs import EmployeeRef


@dataclass(frozen=True)
class LineItem:
    name: str
    amount: float


@dataclass(frozen=True)
class SalaryDraft:
    """Validated salary fields, without identity."""

    employee_id: int
    employee_type: str
    gross_salary: float
    basic_salary: float
    payable_days: float
    allowances: Tuple[LineItem, ...]
    deductions: Tuple[LineItem, ...]
    payment_month: str
    payment_year: str


@dataclass(frozen=True)
class Salary:
    salary_id: int
    employee_id: int
    employee_type: str
    gross_salary: float
    basic_salary: float
    payable_days: float
    allowances: Tuple[LineItem, ...]
    deductions: Tuple[LineItem, ...]
    payment_month: str
    payment_year: str
    employee: Optional[EmployeeRef] = None
    created_at: Optional[datetime] = None

    @property
    def total_allowances(self) -> float:
        return sum(i.amount for i in self.allowances)

    @property
    def total_deductions(self) -> float:
        return sum(i.amount for i in self.deductions)

    @property
    def net_salary(self) -> float:
        return self.gross_salary - self.total_deductions

    @property
    def total(self) -> float:
        return self.basic_salary + self.total_allowances - self.total_deductions

    def to_dict(self) -> dict:
        return {
            "salary_id": self.salary_id,
            "employee_id": self.employee_id,
            "employee": self.employee,
            "employee_type": self.employee_type,
            "gross_salary": self.gross_salary,
            "basic_salary": self.basic_salary,
            "payable_days": self.payable_days,
            "allowances": self.allowances,
            "deductions": self.deductions,
            "payment_month": self.payment_month,
            "payment_year": self.payment_year,
            "total_allowances": self.total_allowances,
            "total_deductions": self.total_deductions,
            "net_salary": self.net_salary,
            "total": self.total,
            "created_at": self.created_at,
        }
