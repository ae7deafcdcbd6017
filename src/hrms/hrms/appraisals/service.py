from __future__ import annotations

from typing import Any, Dict, Mapping, Tuple

from ..common.validators import optional_str, require_int, require_number
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import PEOPLE_ADMINS, require_role
from ..departments.repository import DepartmentRepository
from ..employees.repository import EmployeeRepository
from .model import Appraisal, AppraisalDraft
from .repository import AppraisalRepository

APPRAISAL_EDITORS = PEOPLE_ADMINS | {Role.LEAD}


class AppraisalService:
    def __init__(
        self,
        appraisals: AppraisalRepository,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
    ):
        self._appraisals = appraisals
        self._employees = employees
        self._departments = departments

    def list_appraisals(self):
        return self._appraisals.list_all()

    def _employee_id_for_user(self, user_id: int) -> int:
        employee = self._employees.get_by_user_id(user_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee.employee_id

    def list_for_user(self, user_id: int):
        return self._appraisals.list_for_employee(self._employee_id_for_user(user_id))

    def list_for_supervisor(self, user_id: int):
        return self._appraisals.list_for_supervisor(self._employee_id_for_user(user_id))

    def get_appraisal(self, appraisal_id: int) -> Appraisal:
        appraisal = self._appraisals.get_by_id(appraisal_id)
        if not appraisal:
            raise NotFoundError("Appraisal not found")
        return appraisal

    def _parse(self, data: Mapping[str, Any]) -> AppraisalDraft:
        employee_id = require_int(data.get("employee_id"), "Employee")
        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee does not exist")
        department_id = require_int(data.get("department_id"), "Department")
        if not self._departments.get_by_id(department_id):
            raise ValidationError("Department does not exist")

        supervisors = self._parse_supervisors(data.get("supervisors"))
        ratings: Dict[str, float] = {}
        raw_ratings = data.get("ratings") or {}
        if not isinstance(raw_ratings, Mapping):
            raise ValidationError("Ratings must be an object")
        for criterion, value in raw_ratings.items():
            ratings[str(criterion)] = require_number(value, f"Rating '{criterion}'", minimum=0)

        if data.get("total_rating") in (None, ""):
            raise ValidationError("Total rating is required")

        return AppraisalDraft(
            employee_id=employee_id,
            department_id=department_id,
            accomplishments=optional_str(data.get("accomplishments")),
            supervisors=supervisors,
            supervisor_comments=optional_str(data.get("supervisor_comments")),
            ratings=ratings,
            total_rating=require_number(data.get("total_rating"), "Total rating", minimum=0),
        )

    def _parse_supervisors(self, value: Any) -> Tuple[int, ...]:
        if isinstance(value, (str, int)):
            value = [v for v in str(value).split(",") if v.strip()]
        ids = tuple(dict.fromkeys(require_int(v, "Supervisor") for v in (value or [])))
        found = {e.employee_id for e in self._employees.get_many(ids)}
        if any(i not in found for i in ids):
            raise ValidationError("One or more supervisors do not exist")
        return ids

    def add_appraisal(self, *, current_role: Role, data: Mapping[str, Any]) -> int:
        require_role(current_role, APPRAISAL_EDITORS)
        return self._appraisals.create(self._parse(data))

    def edit_appraisal(self, *, current_role: Role, appraisal_id: int, data: Mapping[str, Any]) -> None:
        require_role(current_role, APPRAISAL_EDITORS)
        self.get_appraisal(appraisal_id)
        self._appraisals.update(appraisal_id, self._parse(data))

    def delete_appraisal(self, *, current_role: Role, appraisal_id: int) -> None:
        require_role(current_role, PEOPLE_ADMINS)
        if not self._appraisals.delete_by_id(appraisal_id):
            raise NotFoundError("Appraisal not found")
