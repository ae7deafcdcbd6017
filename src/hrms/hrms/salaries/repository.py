from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Salary, SalaryDraft


class SalaryRepository(Protocol):
    def list_all(self) -> Sequence[Salary]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[Salary]:
        raise NotImplementedError

    def get_by_id(self, salary_id: int) -> Optional[Salary]:
        raise NotImplementedError

    def find_for_period(self, *, employee_id: int, payment_month: str, payment_year: str) -> Optional[Salary]:
        raise NotImplementedError

    def create(self, draft: SalaryDraft) -> int:
        raise NotImplementedError

    def update(self, salary_id: int, draft: SalaryDraft) -> bool:
        raise NotImplementedError

    def delete_by_id(self, salary_id: int) -> bool:
        raise NotImplementedError
