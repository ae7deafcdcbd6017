from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Tuple

from ..common.datetime_utils import now_local, parse_optional_date
from ..common.validators import as_bool, optional_str, require_enum, require_int, require_non_empty, require_number
from ..core.enums import ApprovalStatus, Role, TicketProvider, TravelMode
from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import CLAIM_APPROVERS, require_role
from ..core.workflow import ensure_transition, parse_action
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import ExpenseItem, TravelDraft, TravelExpenditure
from .repository import TravelRepository

logger = logging.getLogger(__name__)


def parse_expense_items(value: Any, field_name: str) -> Tuple[ExpenseItem, ...]:
    if value is None or value == "":
        return ()
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{field_name} must be a list")

    items = []
    for raw in value:
        if not isinstance(raw, Mapping):
            raise ValidationError(f"{field_name} entries must be objects")
        items.append(
            ExpenseItem(
                date=parse_optional_date(raw.get("date"), f"{field_name} date"),
                description=optional_str(raw.get("description")) or "",
                amount=require_number(raw.get("amount") or 0, f"{field_name} amount", minimum=0),
            )
        )
    return tuple(items)


def _parse_members(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = value.split(",")
    return tuple(m for m in (optional_str(v) for v in (value or [])) if m)


def _parse_yes_no(value: Any) -> bool:
    if isinstance(value, str) and value.strip() in ("Yes", "No"):
        return value.strip() == "Yes"
    return as_bool(value)


class TravelService:
    """Use case: travel expenditure claims and their approval."""

    def __init__(self, travels: TravelRepository, employees: EmployeeRepository):
        self._travels = travels
        self._employees = employees

    def _employee_for_user(self, user_id: int) -> Employee:
        employee = self._employees.get_by_user_id(user_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def list_travels(self):
        return self._travels.list_all()

    def list_for_user(self, user_id: int):
        return self._travels.list_for_employee(self._employee_for_user(user_id).employee_id)

    def get_travel(self, travel_id: int) -> TravelExpenditure:
        travel = self._travels.get_by_id(travel_id)
        if not travel:
            raise NotFoundError("Travel expenditure not found")
        return travel

    def _parse(self, employee: Employee, data: Mapping[str, Any]) -> TravelDraft:
        start_date = parse_optional_date(data.get("start_date"), "Start date")
        return_date = parse_optional_date(data.get("return_date"), "Return date")
        if start_date and return_date and return_date < start_date:
            raise ValidationError("Return date cannot be before start date")

        department_id = data.get("department_id")
        return TravelDraft(
            employee_id=employee.employee_id,
            department_id=require_int(department_id, "Department") if department_id else employee.department_id,
            place_of_visit=require_non_empty(data.get("place_of_visit"), "Place of visit"),
            client_name=require_non_empty(data.get("client_name"), "Client name"),
            project_no=require_non_empty(data.get("project_no"), "Project number"),
            start_date=start_date,
            return_date=return_date,
            purpose_of_visit=require_non_empty(data.get("purpose_of_visit"), "Purpose of visit"),
            travel_mode=require_enum(data.get("travel_mode"), TravelMode, "Travel mode"),
            ticket_provided_by=require_enum(data.get("ticket_provided_by"), TicketProvider, "Ticket provided by"),
            deputation_charges=_parse_yes_no(data.get("deputation_charges")),
            accompanied_team_members=_parse_members(data.get("accompanied_team_members")),
            expenses=parse_expense_items(data.get("expenses"), "Expense"),
            day_charges=parse_expense_items(data.get("day_charges"), "Day charge"),
            claimed_from_client=as_bool(data.get("claimed_from_client")),
        )

    def add_travel(self, *, user_id: int, data: Mapping[str, Any]) -> int:
        employee = self._employee_for_user(user_id)
        return self._travels.create(self._parse(employee, data))

    def update_travel(self, *, travel_id: int, data: Mapping[str, Any]) -> None:
        travel = self.get_travel(travel_id)
        if travel.status != ApprovalStatus.PENDING:
            raise ValidationError("Only pending travel expenditures can be edited")
        employee = self._employees.get_by_id(travel.employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        self._travels.update(travel_id, self._parse(employee, data))

    def delete_travel(self, *, travel_id: int) -> None:
        if not self._travels.delete_by_id(travel_id):
            raise NotFoundError("Travel expenditure not found")

    def decide(
        self,
        *,
        current_role: Role,
        approver_name: str,
        travel_id: int,
        action: str,
        remarks: Optional[str] = None,
    ) -> ApprovalStatus:
        require_role(current_role, CLAIM_APPROVERS)
        target = parse_action(action)
        travel = self.get_travel(travel_id)
        ensure_transition(travel.status, target)

        self._travels.set_status(
            travel_id,
            status=target,
            approved_by=approver_name,
            approved_at=now_local(),
            remarks=optional_str(remarks),
        )
        logger.info("Travel expenditure %s %s by %s", travel_id, target.value, approver_name)
        return target

    def set_voucher(self, *, current_role: Role, travel_id: int, voucher_no: str) -> None:
        require_role(current_role, CLAIM_APPROVERS)
        self.get_travel(travel_id)
        self._travels.set_voucher(travel_id, voucher_no=require_non_empty(voucher_no, "Voucher number"))
