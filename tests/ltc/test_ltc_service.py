from __future__ import annotations

import pytest

from src.hrms.hrms.core.enums import ApprovalStatus, Role
from src.hrms.hrms.core.exceptions import AuthorizationError, NotFoundError, ValidationError

from tests.fakes import FakeRepos


def _payload(employee_id, **overrides):
    data = {
        "employee_id": employee_id,
        "service_completion_from": "2021-01-01",
        "service_completion_to": "2024-12-31",
        "leave_period_from": "2025-05-10",
        "leave_period_to": "2025-05-20",
        "reimbursement_amount": 18000,
    }
    data.update(overrides)
    return data


@pytest.fixture()
def setup():
    repos = FakeRepos()
    employee = repos.add_employee(name="Asha Rao")
    return repos, repos.container().ltc_service, employee


def test_department_defaults_to_employee(setup):
    repos, service, employee = setup
    ltc_id = service.add_claim(_payload(employee.employee_id))

    claim = service.get_claim(ltc_id)
    assert claim.department_id == employee.department_id
    assert claim.status == ApprovalStatus.PENDING

    other_dept = repos.add_department("FIN", "Finance")
    ltc_id = service.add_claim(_payload(employee.employee_id, department_id=other_dept))
    assert service.get_claim(ltc_id).department_id == other_dept


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"employee_id": 404}, "Employee does not exist"),
        ({"leave_period_to": "2025-05-01"}, "Leave period"),
        ({"service_completion_to": "2020-01-01"}, "Service completion"),
        ({"reimbursement_amount": -10}, "Reimbursement amount"),
        ({"leave_period_from": "10/05/2025"}, "YYYY-MM-DD"),
    ],
)
def test_invalid_claims(setup, overrides, message):
    _, service, employee = setup
    with pytest.raises(ValidationError, match=message):
        service.add_claim({**_payload(employee.employee_id), **overrides})


def test_decide_and_edit_lock(setup):
    _, service, employee = setup
    ltc_id = service.add_claim(_payload(employee.employee_id))

    with pytest.raises(AuthorizationError):
        service.decide(current_role=Role.EMPLOYEE, approver_name="Asha", ltc_id=ltc_id, action="approve")

    service.decide(current_role=Role.HR, approver_name="Neha", ltc_id=ltc_id, action="reject", remarks="Outside block")
    claim = service.get_claim(ltc_id)
    assert claim.status == ApprovalStatus.REJECTED
    assert claim.approved_by == "Neha"
    assert claim.remarks == "Outside block"

    with pytest.raises(ValidationError, match="Only pending"):
        service.update_claim(ltc_id=ltc_id, data=_payload(employee.employee_id))


def test_delete_missing_claim(setup):
    _, service, _ = setup
    with pytest.raises(NotFoundError):
        service.delete_claim(ltc_id=5)
