from __future__ import annotations

import pytest

from src.hrms.hrms.core.enums import ApprovalStatus, LeaveType, Role
from src.hrms.hrms.core.exceptions import AuthorizationError, ValidationError
from src.hrms.hrms.employees.model import LeaveBalance
from src.hrms.hrms.leaves.service import LeaveService

from tests.fakes import FakeRepos


@pytest.fixture()
def setup():
    repos = FakeRepos()
    employee = repos.add_employee(name="Asha Rao")
    lead = repos.add_employee(name="Ravi Kumar", role=Role.LEAD)
    other_lead = repos.add_employee(name="Meena Iyer", role=Role.LEAD)
    service = LeaveService(repos.leaves, repos.employees)
    return repos, service, employee, lead, other_lead


def _payload(lead_id, **overrides):
    data = {
        "start_date": "2025-03-03",
        "start_time": "09:30",
        "end_date": "2025-03-05",
        "end_time": "18:00",
        "reason": "Family function",
        "type": "el",
        "applied_to": [lead_id],
    }
    data.update(overrides)
    return data


def test_apply_computes_days_on_server(setup):
    repos, service, employee, lead, _ = setup

    leave_id = service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id, days=99))

    leave = repos.leaves.get_by_id(leave_id)
    assert leave.days == 3.0
    assert leave.status == ApprovalStatus.PENDING
    assert leave.applied_to == (lead.employee_id,)


def test_apply_rejects_insufficient_deductible_balance(setup):
    repos, service, employee, lead, _ = setup
    repos.employees.update_leave_balance(employee.employee_id, LeaveBalance(cl=1.0))

    with pytest.raises(ValidationError, match="Insufficient CL"):
        service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id, type="cl"))


def test_apply_does_not_check_counter_types(setup):
    repos, service, employee, lead, _ = setup

    leave_id = service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id, type="lwp"))
    assert repos.leaves.get_by_id(leave_id).type == LeaveType.LWP


def test_apply_requires_existing_approvers(setup):
    _, service, employee, _, _ = setup

    with pytest.raises(ValidationError, match="approver"):
        service.apply_leave(user_id=employee.user_id, data=_payload(None, applied_to=[]))

    with pytest.raises(ValidationError, match="Approver not found"):
        service.apply_leave(user_id=employee.user_id, data=_payload(999))


def test_approve_deducts_and_reject_restores(setup):
    repos, service, employee, lead, _ = setup
    leave_id = service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id))

    status = service.decide(
        current_user_id=lead.user_id,
        current_role=Role.LEAD,
        approver_name="Ravi Kumar",
        leave_id=leave_id,
        action="approve",
    )
    assert status == ApprovalStatus.APPROVED
    assert repos.employees.get_by_id(employee.employee_id).leave_balance.el == 27.0
    assert repos.leaves.get_by_id(leave_id).approved_by == "Ravi Kumar"

    service.decide(
        current_user_id=lead.user_id,
        current_role=Role.LEAD,
        approver_name="Ravi Kumar",
        leave_id=leave_id,
        action="reject",
    )
    assert repos.employees.get_by_id(employee.employee_id).leave_balance.el == 30.0
    leave = repos.leaves.get_by_id(leave_id)
    assert leave.status == ApprovalStatus.REJECTED
    assert leave.rejected_by == "Ravi Kumar"


def test_approving_counter_type_increments_it(setup):
    repos, service, employee, lead, _ = setup
    leave_id = service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id, type="od"))

    service.decide(current_user_id=0, current_role=Role.HR, approver_name="HR", leave_id=leave_id, action="approved")

    assert repos.employees.get_by_id(employee.employee_id).leave_balance.od == 3.0


def test_rejecting_approved_counter_leave_never_blocks(setup):
    repos, service, employee, lead, _ = setup
    leave_id = service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id, type="od"))
    service.decide(current_user_id=0, current_role=Role.HR, approver_name="HR", leave_id=leave_id, action="approve")
    repos.employees.update_leave_balance(employee.employee_id, LeaveBalance(od=1.0))

    service.decide(current_user_id=0, current_role=Role.HR, approver_name="HR", leave_id=leave_id, action="reject")

    assert repos.leaves.get_by_id(leave_id).status == ApprovalStatus.REJECTED
    assert repos.employees.get_by_id(employee.employee_id).leave_balance.od == -2.0


def test_decision_writes_balance_and_status_together(setup, monkeypatch):
    repos, service, employee, lead, _ = setup
    leave_id = service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id))
    calls = []
    combined = repos.leaves.set_status_with_balance

    def recording(leave_id, **kwargs):
        calls.append(kwargs)
        return combined(leave_id, **kwargs)

    monkeypatch.setattr(repos.leaves, "set_status_with_balance", recording)
    service.decide(current_user_id=0, current_role=Role.HR, approver_name="HR", leave_id=leave_id, action="approve")

    assert len(calls) == 1
    assert calls[0]["employee_id"] == employee.employee_id
    assert calls[0]["balance"].el == 27.0
    assert calls[0]["status"] == ApprovalStatus.APPROVED


def test_failed_decision_write_changes_nothing(setup, monkeypatch):
    repos, service, employee, lead, _ = setup
    leave_id = service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id))

    def failing(leave_id, **kwargs):
        raise RuntimeError("connection lost")

    monkeypatch.setattr(repos.leaves, "set_status_with_balance", failing)
    with pytest.raises(RuntimeError):
        service.decide(current_user_id=0, current_role=Role.HR, approver_name="HR", leave_id=leave_id, action="approve")

    assert repos.employees.get_by_id(employee.employee_id).leave_balance.el == 30.0
    assert repos.leaves.get_by_id(leave_id).status == ApprovalStatus.PENDING


def test_approve_fails_when_balance_ran_out(setup):
    repos, service, employee, lead, _ = setup
    leave_id = service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id, type="sl"))
    repos.employees.update_leave_balance(employee.employee_id, LeaveBalance(sl=1.0))

    with pytest.raises(ValidationError, match="Insufficient SL"):
        service.decide(current_user_id=0, current_role=Role.ADMIN, approver_name="Admin", leave_id=leave_id, action="approve")
    assert repos.leaves.get_by_id(leave_id).status == ApprovalStatus.PENDING


def test_rejecting_pending_leave_leaves_balance_alone(setup):
    repos, service, employee, lead, _ = setup
    leave_id = service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id))

    service.decide(current_user_id=0, current_role=Role.HR, approver_name="HR", leave_id=leave_id, action="reject")

    assert repos.employees.get_by_id(employee.employee_id).leave_balance.el == 30.0


def test_rejected_leave_cannot_be_approved(setup):
    _, service, employee, lead, _ = setup
    leave_id = service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id))
    service.decide(current_user_id=0, current_role=Role.HR, approver_name="HR", leave_id=leave_id, action="reject")

    with pytest.raises(ValidationError):
        service.decide(current_user_id=0, current_role=Role.HR, approver_name="HR", leave_id=leave_id, action="approve")


def test_only_listed_leads_and_admin_roles_decide(setup):
    _, service, employee, lead, other_lead = setup
    leave_id = service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id))

    with pytest.raises(AuthorizationError):
        service.decide(
            current_user_id=employee.user_id,
            current_role=Role.EMPLOYEE,
            approver_name="Asha Rao",
            leave_id=leave_id,
            action="approve",
        )
    with pytest.raises(AuthorizationError):
        service.decide(
            current_user_id=other_lead.user_id,
            current_role=Role.LEAD,
            approver_name="Meena Iyer",
            leave_id=leave_id,
            action="approve",
        )


def test_approver_inbox_lists_assigned_leaves(setup):
    _, service, employee, lead, other_lead = setup
    service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id))

    assert len(service.list_for_approver(lead.user_id)) == 1
    assert service.list_for_approver(other_lead.user_id) == []
    assert len(service.list_for_user(employee.user_id)) == 1


def test_only_pending_leave_can_be_edited(setup):
    _, service, employee, lead, _ = setup
    leave_id = service.apply_leave(user_id=employee.user_id, data=_payload(lead.employee_id))
    service.decide(current_user_id=0, current_role=Role.HR, approver_name="HR", leave_id=leave_id, action="approve")

    with pytest.raises(ValidationError, match="pending"):
        service.update_leave(
            current_user_id=employee.user_id,
            current_role=Role.EMPLOYEE,
            leave_id=leave_id,
            data=_payload(lead.employee_id),
        )
