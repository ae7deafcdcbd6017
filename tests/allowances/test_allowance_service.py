from __future__ import annotations

import pytest

from src.hrms.hrms.core.enums import ApprovalStatus, Role
from src.hrms.hrms.core.exceptions import AuthorizationError, ValidationError

from tests.fakes import FakeRepos


def _payload(employee_id, **overrides):
    data = {
        "employee_id": employee_id,
        "client": "Acme",
        "project_no": "P-7",
        "allowance_month": "June",
        "allowance_year": 2025,
        "allowance_type": "Site",
        "allowance_amount": 1000,
    }
    data.update(overrides)
    return data


@pytest.fixture()
def setup():
    repos = FakeRepos()
    employee = repos.add_employee(name="Asha Rao")
    container = repos.container()
    return container.allowance_service, container.fixed_allowance_service, employee


def test_variable_allowance_starts_pending(setup):
    variable, _, employee = setup
    allowance_id = variable.add_allowance(current_role=Role.ACCOUNTS, added_by="Kavya", data=_payload(employee.employee_id))

    allowance = variable.get_allowance(allowance_id)
    assert allowance.status == ApprovalStatus.PENDING
    assert allowance.allowance_year == "2025"
    assert allowance.added_by == "Kavya"


def test_fixed_allowance_is_approved_immediately(setup):
    _, fixed, employee = setup
    allowance_id = fixed.add_allowance(current_role=Role.HR, added_by=None, data=_payload(employee.employee_id))

    assert fixed.get_allowance(allowance_id).status == ApprovalStatus.APPROVED


def test_matching_allowance_is_merged_and_reset_to_pending(setup):
    variable, _, employee = setup
    first = variable.add_allowance(current_role=Role.ACCOUNTS, added_by=None, data=_payload(employee.employee_id))
    variable.decide(current_role=Role.ACCOUNTS, allowance_id=first, action="approve")

    merged = variable.add_allowance(
        current_role=Role.ACCOUNTS, added_by=None, data=_payload(employee.employee_id, allowance_amount=250)
    )

    assert merged == first
    allowance = variable.get_allowance(first)
    assert allowance.allowance_amount == 1250
    assert allowance.status == ApprovalStatus.PENDING
    assert len(variable.list_allowances()) == 1


def test_different_project_is_a_new_record(setup):
    variable, _, employee = setup
    first = variable.add_allowance(current_role=Role.ACCOUNTS, added_by=None, data=_payload(employee.employee_id))
    second = variable.add_allowance(
        current_role=Role.ACCOUNTS, added_by=None, data=_payload(employee.employee_id, project_no="P-8")
    )
    assert first != second


def test_only_variable_allowances_are_decided(setup):
    variable, fixed, employee = setup
    fixed_id = fixed.add_allowance(current_role=Role.HR, added_by=None, data=_payload(employee.employee_id))
    with pytest.raises(ValidationError, match="do not need approval"):
        fixed.decide(current_role=Role.ADMIN, allowance_id=fixed_id, action="approve")

    variable_id = variable.add_allowance(current_role=Role.HR, added_by=None, data=_payload(employee.employee_id))
    with pytest.raises(AuthorizationError):
        variable.decide(current_role=Role.HR, allowance_id=variable_id, action="approve")

    assert variable.decide(current_role=Role.ADMIN, allowance_id=variable_id, action="reject") == ApprovalStatus.REJECTED
    with pytest.raises(ValidationError):
        variable.decide(current_role=Role.ADMIN, allowance_id=variable_id, action="approve")


def test_voucher_number_required(setup):
    variable, _, employee = setup
    allowance_id = variable.add_allowance(current_role=Role.HR, added_by=None, data=_payload(employee.employee_id))

    with pytest.raises(ValidationError):
        variable.set_voucher(current_role=Role.HR, allowance_id=allowance_id, voucher_no="  ")
    variable.set_voucher(current_role=Role.HR, allowance_id=allowance_id, voucher_no="V-101")
    assert variable.get_allowance(allowance_id).voucher_no == "V-101"


def test_non_finite_amount_rejected(setup):
    variable, _, employee = setup
    with pytest.raises(ValidationError, match="finite"):
        variable.add_allowance(
            current_role=Role.ACCOUNTS, added_by=None, data=_payload(employee.employee_id, allowance_amount="nan")
        )
    assert variable.list_allowances() == []
