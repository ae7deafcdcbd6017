from __future__ import annotations

from typing import Any, Mapping, Optional

from ..common.validators import optional_str, require_non_empty
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import PEOPLE_ADMINS, require_role
from .model import Department
from .repository import DepartmentRepository


class DepartmentService:
    def __init__(self, departments: DepartmentRepository):
        self._departments = departments

    def list_departments(self):
        return self._departments.list_all()

    def get_department(self, department_id: int) -> Department:
        dept = self._departments.get_by_id(department_id)
        if not dept:
            raise NotFoundError("Department not found")
        return dept

    def _clean(self, data: Mapping[str, Any]) -> tuple[str, str, Optional[str]]:
        code = require_non_empty(data.get("department_code"), "Department code").upper()
        name = require_non_empty(data.get("department_name"), "Department name")
        return code, name, optional_str(data.get("description"))

    def add_department(self, *, current_role: Role, data: Mapping[str, Any]) -> int:
        require_role(current_role, PEOPLE_ADMINS)
        code, name, description = self._clean(data)
        if self._departments.get_by_code(code):
            raise ValidationError("Department code already exists")
        return self._departments.create(department_code=code, department_name=name, description=description)

    def update_department(self, *, current_role: Role, department_id: int, data: Mapping[str, Any]) -> None:
        require_role(current_role, PEOPLE_ADMINS)
        self.get_department(department_id)
        code, name, description = self._clean(data)

        other = self._departments.get_by_code(code)
        if other and other.department_id != int(department_id):
            raise ValidationError("Department code already exists")

        self._departments.update(department_id, department_code=code, department_name=name, description=description)

    def delete_department(self, *, current_role: Role, department_id: int) -> None:
        require_role(current_role, PEOPLE_ADMINS)
        if not self._departments.delete_by_id(department_id):
            raise NotFoundError("Department not found")
