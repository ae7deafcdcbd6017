from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CtcRow:
    """One employee-month of cost to company."""

    key: str
    emp_no: str
    employee_name: str
    department: str
    month: str
    year: str
    gross_salary: float = 0.0
    basic_salary: float = 0.0
    salary_allowances: float = 0.0
    salary_deductions: float = 0.0
    variable_allowances: float = 0.0
    fixed_allowances: float = 0.0
    total_ctc: float = 0.0

    @property
    def salary_total(self) -> float:
        return self.basic_salary + self.salary_allowances - self.salary_deductions


@dataclass(frozen=True)
class CtcSummary:
    total_ctc: float
    total_salary: float
    total_variable: float
    total_fixed: float
    average_ctc: float
    unique_employees: int
    total_records: int


@dataclass(frozen=True)
class EmployeeCtcRow:
    month: str
    year: str
    gross_salary: float
    salary_total: float
    variable_allowances: float
    fixed_allowances: float
    net_ctc: float
