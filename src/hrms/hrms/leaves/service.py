from __future__ import annotations

import logging
from typing import Any, Mapping, Tuple

from ..common.datetime_utils import parse_date_field, parse_hhmm
from ..common.validators import require_enum, require_int, require_non_empty
from ..core.constants import MIN_LEAVE_DAYS, OFFICE_END, OFFICE_START
from ..core.enums import ApprovalStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.permissions import LEAVE_APPROVERS, PEOPLE_ADMINS, require_role
from ..core.workflow import ensure_transition, parse_action
from ..employees.model import Employee, LeaveBalance
from ..employees.repository import EmployeeRepository
from .calculator import compute_leave_days
from .model import Leave, LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def _parse_approvers(value: Any) -> Tuple[int, ...]:
    if value is None or value == "":
        return ()
    if isinstance(value, (str, int)):
        value = str(value).split(",")
    ids = []
    for item in value:
        if str(item).strip():
            ids.append(require_int(str(item).strip(), "Approver"))
    # Keep order, drop duplicates.
    return tuple(dict.fromkeys(ids))


def apply_balance_effect(balance: LeaveBalance, leave_type: LeaveType, days: float, *, reverse: bool = False) -> LeaveBalance:
    """Approving consumes deductible balance and grows counters; ``reverse`` undoes it."""

    delta = -days if leave_type.is_deductible else days
    if reverse:
        delta = -delta
    # Taking back a counter credit is never refused.
    if reverse and not leave_type.is_deductible:
        return balance.adjusted(leave_type, delta)
    if delta < 0 and balance.get(leave_type) + delta < 0:
        raise ValidationError(f"Insufficient {leave_type.value.upper()} balance")
    return balance.adjusted(leave_type, delta)


class LeaveService:
    """Use case: apply for leave and run it through approval."""

    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository):
        self._leaves = leaves
        self._employees = employees

    def _employee_for_user(self, user_id: int) -> Employee:
        employee = self._employees.get_by_user_id(user_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _get_leave(self, leave_id: int) -> Leave:
        leave = self._leaves.get_by_id(leave_id)
        if not leave:
            raise NotFoundError("Leave not found")
        return leave

    def list_leaves(self):
        return self._leaves.list_all()

    def list_for_user(self, user_id: int):
        return self._leaves.list_for_employee(self._employee_for_user(user_id).employee_id)

    def list_for_approver(self, user_id: int):
        return self._leaves.list_for_approver(self._employee_for_user(user_id).employee_id)

    def preview_days(self, data: Mapping[str, Any]) -> float:
        start_date = parse_date_field(data.get("start_date"), "Start date")
        end_date = parse_date_field(data.get("end_date"), "End date")
        start_time = parse_hhmm(data.get("start_time"), "Start time", default=OFFICE_START)
        end_time = parse_hhmm(data.get("end_time"), "End time", default=OFFICE_END)
        return compute_leave_days(start_date, end_date, start_time, end_time)

    def _parse_request(self, data: Mapping[str, Any]) -> LeaveRequest:
        start_date = parse_date_field(data.get("start_date"), "Start date")
        end_date = parse_date_field(data.get("end_date"), "End date")
        start_time = parse_hhmm(data.get("start_time"), "Start time", default=OFFICE_START)
        end_time = parse_hhmm(data.get("end_time"), "End time", default=OFFICE_END)

        days = compute_leave_days(start_date, end_date, start_time, end_time)
        if days < MIN_LEAVE_DAYS:
            raise ValidationError(f"Leave must be at least {MIN_LEAVE_DAYS:g} day")

        applied_to = _parse_approvers(data.get("applied_to"))
        if not applied_to:
            raise ValidationError("Select at least one approver")
        found = {e.employee_id for e in self._employees.get_many(applied_to)}
        missing = [i for i in applied_to if i not in found]
        if missing:
            raise ValidationError(f"Approver not found: {', '.join(str(i) for i in missing)}")

        return LeaveRequest(
            start_date=start_date,
            start_time=start_time,
            end_date=end_date,
            end_time=end_time,
            reason=require_non_empty(data.get("reason"), "Reason"),
            type=require_enum(data.get("type"), LeaveType, "Leave type"),
            days=days,
            applied_to=applied_to,
        )

    @staticmethod
    def _check_balance(employee: Employee, request: LeaveRequest) -> None:
        if request.type.is_deductible and employee.leave_balance.get(request.type) < request.days:
            raise ValidationError(f"Insufficient {request.type.value.upper()} balance")

    def apply_leave(self, *, user_id: int, data: Mapping[str, Any]) -> int:
        employee = self._employee_for_user(user_id)
        request = self._parse_request(data)
        self._check_balance(employee, request)

        leave_id = self._leaves.create(employee_id=employee.employee_id, request=request)
        logger.info("Leave %s applied by employee %s (%s, %.1f days)", leave_id, employee.employee_id, request.type.value, request.days)
        return leave_id

    def _ensure_owner_or_admin(self, leave: Leave, *, current_user_id: int, current_role: Role) -> None:
        if current_role in PEOPLE_ADMINS:
            return
        employee = self._employees.get_by_user_id(current_user_id)
        if not employee or employee.employee_id != leave.employee_id:
            raise AuthorizationError("You can only change your own leave")

    def update_leave(self, *, current_user_id: int, current_role: Role, leave_id: int, data: Mapping[str, Any]) -> None:
        leave = self._get_leave(leave_id)
        self._ensure_owner_or_admin(leave, current_user_id=current_user_id, current_role=current_role)
        if leave.status != ApprovalStatus.PENDING:
            raise ValidationError("Only pending leaves can be edited")

        employee = self._employees.get_by_id(leave.employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        request = self._parse_request(data)
        self._check_balance(employee, request)
        self._leaves.update(leave_id, request=request)

    def delete_leave(self, *, current_user_id: int, current_role: Role, leave_id: int) -> None:
        leave = self._get_leave(leave_id)
        self._ensure_owner_or_admin(leave, current_user_id=current_user_id, current_role=current_role)
        if leave.status != ApprovalStatus.PENDING and current_role not in PEOPLE_ADMINS:
            raise ValidationError("Only pending leaves can be deleted")
        self._leaves.delete_by_id(leave_id)

    def _ensure_can_decide(self, leave: Leave, *, current_user_id: int, current_role: Role) -> None:
        require_role(current_role, LEAVE_APPROVERS)
        if current_role == Role.LEAD:
            approver = self._employees.get_by_user_id(current_user_id)
            if not approver or approver.employee_id not in leave.applied_to:
                raise AuthorizationError("This leave was not sent to you")

    def decide(
        self,
        *,
        current_user_id: int,
        current_role: Role,
        approver_name: str,
        leave_id: int,
        action: str,
    ) -> ApprovalStatus:
        target = parse_action(action)
        leave = self._get_leave(leave_id)
        self._ensure_can_decide(leave, current_user_id=current_user_id, current_role=current_role)
        ensure_transition(leave.status, target)

        employee = self._employees.get_by_id(leave.employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        if target == ApprovalStatus.APPROVED:
            balance = apply_balance_effect(employee.leave_balance, leave.type, leave.days)
            self._leaves.set_status_with_balance(
                leave_id, employee_id=employee.employee_id, balance=balance, status=target, approved_by=approver_name
            )
        elif leave.status == ApprovalStatus.APPROVED:
            balance = apply_balance_effect(employee.leave_balance, leave.type, leave.days, reverse=True)
            self._leaves.set_status_with_balance(
                leave_id, employee_id=employee.employee_id, balance=balance, status=target, rejected_by=approver_name
            )
        else:
            self._leaves.set_status(leave_id, status=target, rejected_by=approver_name)

        logger.info("Leave %s %s by %s (was %s)", leave_id, target.value, approver_name, leave.status.value)
        return target

    def set_ror(self, *, current_user_id: int, current_role: Role, leave_id: int, ror: str) -> None:
        leave = self._get_leave(leave_id)
        self._ensure_can_decide(leave, current_user_id=current_user_id, current_role=current_role)
        self._leaves.set_ror(leave_id, ror=require_non_empty(ror, "Reason of rejection"))

