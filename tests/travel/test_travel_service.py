from __future__ import annotations

from datetime import date

import pytest

from src.hrms.hrms.core.enums import ApprovalStatus, Role, TicketProvider, TravelMode
from src.hrms.hrms.core.exceptions import AuthorizationError, ValidationError

from tests.fakes import FakeRepos


def _payload(**overrides):
    data = {
        "place_of_visit": "Pune",
        "client_name": "Acme",
        "project_no": "P-11",
        "start_date": "2025-02-03",
        "return_date": "2025-02-06",
        "purpose_of_visit": "Site survey",
        "travel_mode": "Rail",
        "ticket_provided_by": "Client",
        "deputation_charges": "Yes",
        "accompanied_team_members": "Ravi, Meena, ",
        "expenses": [
            {"date": "2025-02-03", "description": "Cab", "amount": 450},
            {"date": "2025-02-04", "description": "Meals", "amount": "300.50"},
        ],
        "day_charges": [{"date": "2025-02-04", "description": "DA", "amount": 1200}],
    }
    data.update(overrides)
    return data


@pytest.fixture()
def setup():
    repos = FakeRepos()
    employee = repos.add_employee(name="Asha Rao")
    return repos.container().travel_service, employee


def test_add_travel_parses_and_totals(setup):
    service, employee = setup
    travel_id = service.add_travel(user_id=employee.user_id, data=_payload())

    travel = service.get_travel(travel_id)
    assert travel.employee_id == employee.employee_id
    assert travel.department_id == employee.department_id
    assert travel.travel_mode == TravelMode.RAIL
    assert travel.ticket_provided_by == TicketProvider.CLIENT
    assert travel.deputation_charges is True
    assert travel.accompanied_team_members == ("Ravi", "Meena")
    assert travel.expenses[0].date == date(2025, 2, 3)
    assert travel.total_amount == pytest.approx(450 + 300.5 + 1200)
    assert travel.status == ApprovalStatus.PENDING


def test_total_is_recomputed_on_update(setup):
    service, employee = setup
    travel_id = service.add_travel(user_id=employee.user_id, data=_payload())

    service.update_travel(travel_id=travel_id, data=_payload(day_charges=[], deputation_charges="No"))

    travel = service.get_travel(travel_id)
    assert travel.total_amount == pytest.approx(750.5)
    assert travel.deputation_charges is False


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"return_date": "2025-02-01"}, "Return date"),
        ({"travel_mode": "Bus"}, "Travel mode"),
        ({"place_of_visit": " "}, "Place of visit"),
        ({"expenses": [{"amount": -5}]}, "Expense amount"),
    ],
)
def test_invalid_travel(setup, overrides, message):
    service, employee = setup
    with pytest.raises(ValidationError, match=message):
        service.add_travel(user_id=employee.user_id, data=_payload(**overrides))


def test_decide_records_approver(setup):
    service, employee = setup
    travel_id = service.add_travel(user_id=employee.user_id, data=_payload())

    with pytest.raises(AuthorizationError):
        service.decide(current_role=Role.LEAD, approver_name="Ravi", travel_id=travel_id, action="approve")

    service.decide(
        current_role=Role.ACCOUNTS, approver_name="Kavya", travel_id=travel_id, action="approve", remarks=" ok "
    )
    travel = service.get_travel(travel_id)
    assert travel.status == ApprovalStatus.APPROVED
    assert travel.approved_by == "Kavya"
    assert travel.approved_at is not None
    assert travel.remarks == "ok"

    with pytest.raises(ValidationError, match="Only pending"):
        service.update_travel(travel_id=travel_id, data=_payload())


def test_voucher(setup):
    service, employee = setup
    travel_id = service.add_travel(user_id=employee.user_id, data=_payload())

    service.set_voucher(current_role=Role.HR, travel_id=travel_id, voucher_no="TV-9")
    assert service.get_travel(travel_id).voucher_no == "TV-9"
    with pytest.raises(AuthorizationError):
        service.set_voucher(current_role=Role.EMPLOYEE, travel_id=travel_id, voucher_no="TV-10")
