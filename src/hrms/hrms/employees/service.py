from __future__ import annotations

import logging
from typing import Any, Mapping

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import parse_date_field, parse_optional_date
from ..common.validators import (
    optional_str,
    require_enum,
    require_int,
    require_min_length,
    require_non_empty,
    require_number,
)
from ..core.constants import LEAVE_BALANCE_MAX, MIN_PASSWORD_LENGTH
from ..core.enums import Gender, LeaveType, MaritalStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import PEOPLE_ADMINS, require_role
from ..departments.repository import DepartmentRepository
from ..users.repository import UserRepository
from .model import OPTIONAL_PROFILE_FIELDS, REQUIRED_PROFILE_FIELDS, Employee, LeaveBalance
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: employee records and their login accounts."""

    def __init__(self, employees: EmployeeRepository, users: UserRepository, departments: DepartmentRepository):
        self._employees = employees
        self._users = users
        self._departments = departments

    def list_employees(self):
        return self._employees.list_all()

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def get_by_user_id(self, user_id: int) -> Employee:
        employee = self._employees.get_by_user_id(user_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def get_by_emp_no(self, emp_no: int) -> Employee:
        employee = self._employees.get_by_emp_no(emp_no)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _profile_fields(self, data: Mapping[str, Any], *, partial: bool) -> dict[str, Any]:
        """Validate profile fields from a request payload.

        With ``partial`` only the keys present in ``data`` are validated and returned.
        """

        fields: dict[str, Any] = {}

        def wanted(key: str) -> bool:
            return not partial or key in data

        for key in REQUIRED_PROFILE_FIELDS:
            if wanted(key):
                fields[key] = require_non_empty(data.get(key), key.replace("_", " ").capitalize())
        if "email" in fields:
            fields["email"] = fields["email"].lower()

        if wanted("emp_no"):
            fields["emp_no"] = require_int(data.get("emp_no"), "Employee number")
        if wanted("dob"):
            fields["dob"] = parse_date_field(data.get("dob"), "Date of birth")
        if wanted("doj"):
            fields["doj"] = parse_date_field(data.get("doj"), "Date of joining")
        if wanted("gender"):
            fields["gender"] = require_enum(data.get("gender"), Gender, "Gender")
        if wanted("marital_status"):
            fields["marital_status"] = require_enum(data.get("marital_status"), MaritalStatus, "Marital status")
        if wanted("role"):
            fields["role"] = require_enum(data.get("role"), Role, "Role")
        if wanted("department_id"):
            department_id = require_int(data.get("department_id"), "Department")
            if not self._departments.get_by_id(department_id):
                raise ValidationError("Department does not exist")
            fields["department_id"] = department_id

        for key in OPTIONAL_PROFILE_FIELDS:
            if key in data:
                fields[key] = optional_str(data.get(key))
        return fields

    def add_employee(self, *, current_role: Role, data: Mapping[str, Any]) -> int:
        require_role(current_role, PEOPLE_ADMINS)

        fields = self._profile_fields(data, partial=False)
        password = require_min_length(data.get("password") or "", "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(fields["email"]):
            raise ValidationError("An account with this email already exists")
        if self._employees.get_by_emp_no(fields["emp_no"]):
            raise ValidationError("Employee number already exists")

        user_id = self._users.create_user(
            name=fields["name"],
            email=fields["email"],
            password_hash=generate_password_hash(password),
            role=fields["role"],
        )
        try:
            employee_id = self._employees.create(user_id=user_id, fields=fields, leave_balance=LeaveBalance())
        except Exception:
            # Do not leave an account without its employee record.
            self._users.delete_by_id(user_id)
            raise

        logger.info("Employee %s created (emp_no=%s)", employee_id, fields["emp_no"])
        return employee_id

    def update_employee(self, *, current_role: Role, employee_id: int, data: Mapping[str, Any]) -> None:
        require_role(current_role, PEOPLE_ADMINS)
        employee = self.get_employee(employee_id)

        fields = self._profile_fields(data, partial=True)
        if "email" in fields and fields["email"] != employee.email:
            other = self._users.get_by_email(fields["email"])
            if other and other.user_id != employee.user_id:
                raise ValidationError("An account with this email already exists")
        if "emp_no" in fields and fields["emp_no"] != employee.emp_no:
            if self._employees.get_by_emp_no(fields["emp_no"]):
                raise ValidationError("Employee number already exists")

        self._employees.update(employee_id, fields)
        self._users.update_user(
            employee.user_id,
            name=fields.get("name"),
            email=fields.get("email"),
            role=fields.get("role"),
        )

    def delete_employee(self, *, current_role: Role, employee_id: int) -> None:
        require_role(current_role, PEOPLE_ADMINS)
        employee = self.get_employee(employee_id)

        self._employees.delete_by_id(employee_id)
        self._users.delete_by_id(employee.user_id)
        logger.info("Employee %s deleted", employee_id)

    def set_leave_balance(self, *, current_role: Role, emp_no: int, values: Mapping[str, Any]) -> LeaveBalance:
        require_role(current_role, PEOPLE_ADMINS)
        employee = self.get_by_emp_no(emp_no)

        balance = employee.leave_balance
        for key, raw in values.items():
            leave_type = require_enum(key, LeaveType, "Leave type")
            amount = require_number(raw, f"{leave_type.value.upper()} balance", minimum=0)
            maximum = LEAVE_BALANCE_MAX.get(leave_type.value)
            if maximum is not None and amount > maximum:
                raise ValidationError(f"{leave_type.value.upper()} balance cannot exceed {maximum:g}")
            balance = balance.adjusted(leave_type, amount - balance.get(leave_type))

        self._employees.update_leave_balance(employee.employee_id, balance)
        logger.info("Leave balance for emp_no=%s set to %s", emp_no, balance.to_dict())
        return balance

    def update_journey(self, *, current_role: Role, employee_id: int, data: Mapping[str, Any]) -> None:
        """Set the date of joining and/or leaving; an empty ``dol`` clears it."""

        require_role(current_role, PEOPLE_ADMINS)
        employee = self.get_employee(employee_id)

        fields: dict[str, Any] = {}
        if data.get("doj"):
            fields["doj"] = parse_date_field(data.get("doj"), "Date of joining")
        if "dol" in data:
            fields["dol"] = parse_optional_date(data.get("dol"), "Date of leaving")
        if not fields:
            raise ValidationError("Nothing to update")

        doj = fields.get("doj", employee.doj)
        dol = fields.get("dol", employee.dol)
        if dol is not None and dol < doj:
            raise ValidationError("Date of leaving cannot be before date of joining")

        self._employees.update(employee_id, fields)
