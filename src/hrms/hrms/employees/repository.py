from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Employee, LeaveBalance


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_emp_no(self, emp_no: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_many(self, employee_ids: Sequence[int]) -> Sequence[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create(self, *, user_id: int, fields: Mapping[str, Any], leave_balance: LeaveBalance) -> int:
        """Insert an employee; ``fields`` holds column values keyed by Employee attribute name."""

        raise NotImplementedError

    def update(self, employee_id: int, fields: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def update_leave_balance(self, employee_id: int, balance: LeaveBalance) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError
