from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_date_field
from ..common.validators import optional_str, require_int, require_number
from ..core.enums import ApprovalStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import CLAIM_APPROVERS, require_role
from ..core.workflow import ensure_transition, parse_action
from ..employees.repository import EmployeeRepository
from .model import LtcClaim, LtcDraft
from .repository import LtcRepository

logger = logging.getLogger(__name__)


class LtcService:
    def __init__(self, claims: LtcRepository, employees: EmployeeRepository):
        self._claims = claims
        self._employees = employees

    def list_claims(self):
        return self._claims.list_all()

    def list_for_employee(self, employee_id: int):
        return self._claims.list_for_employee(employee_id)

    def get_claim(self, ltc_id: int) -> LtcClaim:
        claim = self._claims.get_by_id(ltc_id)
        if not claim:
            raise NotFoundError("LTC record not found")
        return claim

    def _parse(self, data: Mapping[str, Any]) -> LtcDraft:
        employee_id = require_int(data.get("employee_id"), "Employee")
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise ValidationError("Employee does not exist")

        draft = LtcDraft(
            employee_id=employee_id,
            department_id=require_int(data.get("department_id") or employee.department_id, "Department"),
            service_completion_from=parse_date_field(data.get("service_completion_from"), "Service completion from"),
            service_completion_to=parse_date_field(data.get("service_completion_to"), "Service completion to"),
            leave_period_from=parse_date_field(data.get("leave_period_from"), "Leave period from"),
            leave_period_to=parse_date_field(data.get("leave_period_to"), "Leave period to"),
            reimbursement_amount=require_number(data.get("reimbursement_amount"), "Reimbursement amount", minimum=0),
        )
        if draft.service_completion_to < draft.service_completion_from:
            raise ValidationError("Service completion period ends before it starts")
        if draft.leave_period_to < draft.leave_period_from:
            raise ValidationError("Leave period ends before it starts")
        return draft

    def add_claim(self, data: Mapping[str, Any]) -> int:
        return self._claims.create(self._parse(data))

    def update_claim(self, *, ltc_id: int, data: Mapping[str, Any]) -> None:
        claim = self.get_claim(ltc_id)
        if claim.status != ApprovalStatus.PENDING:
            raise ValidationError("Only pending LTC records can be edited")
        self._claims.update(ltc_id, self._parse(data))

    def delete_claim(self, *, ltc_id: int) -> None:
        if not self._claims.delete_by_id(ltc_id):
            raise NotFoundError("LTC record not found")

    def decide(
        self,
        *,
        current_role: Role,
        approver_name: str,
        ltc_id: int,
        action: str,
        remarks: Optional[str] = None,
    ) -> ApprovalStatus:
        require_role(current_role, CLAIM_APPROVERS)
        target = parse_action(action)
        claim = self.get_claim(ltc_id)
        ensure_transition(claim.status, target)

        self._claims.set_status(ltc_id, status=target, approved_by=approver_name, remarks=optional_str(remarks))
        logger.info("LTC %s %s by %s", ltc_id, target.value, approver_name)
        return target
