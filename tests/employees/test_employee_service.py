from __future__ import annotations

from datetime import date

import pytest
from werkzeug.security import check_password_hash

from src.hrms.hrms.core.enums import Gender, Role
from src.hrms.hrms.core.exceptions import AuthorizationError, ValidationError
from src.hrms.hrms.employees.model import LeaveBalance
from src.hrms.hrms.employees.service import EmployeeService

from tests.fakes import FakeEmployeeRepo, FakeRepos


def _payload(department_id, **overrides):
    data = {
        "emp_no": 2001,
        "name": "Farah Khan",
        "email": "Farah@HRMS.local",
        "password": "welcome1",
        "dob": "1994-08-17",
        "doj": "2023-01-09",
        "gender": "Female",
        "marital_status": "Married",
        "designation": "Analyst",
        "department_id": department_id,
        "qualification": "MBA",
        "contact_no": "9811111111",
        "aadhar_no": "999988887777",
        "pan": "FGHIJ5678K",
        "role": "employee",
        "bank": " HDFC ",
        "ifsc": "",
    }
    data.update(overrides)
    return data


@pytest.fixture()
def repos():
    repos = FakeRepos()
    repos.add_department()
    return repos


def test_add_employee_creates_login_and_record(repos):
    service = repos.container().employee_service
    employee_id = service.add_employee(current_role=Role.HR, data=_payload(1))

    employee = service.get_employee(employee_id)
    assert employee.email == "farah@hrms.local"
    assert employee.gender == Gender.FEMALE
    assert employee.dob == date(1994, 8, 17)
    assert employee.bank == "HDFC"
    assert employee.ifsc is None
    assert employee.leave_balance == LeaveBalance()

    user = repos.users.get_by_id(employee.user_id)
    assert user.role == Role.EMPLOYEE
    assert check_password_hash(user.password_hash, "welcome1")


def test_duplicate_email_or_emp_no_rejected(repos):
    service = repos.container().employee_service
    service.add_employee(current_role=Role.ADMIN, data=_payload(1))

    with pytest.raises(ValidationError, match="email already exists"):
        service.add_employee(current_role=Role.ADMIN, data=_payload(1, emp_no=2002, email="farah@hrms.local"))
    with pytest.raises(ValidationError, match="Employee number"):
        service.add_employee(current_role=Role.ADMIN, data=_payload(1, email="other@hrms.local"))


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"department_id": 99}, "Department does not exist"),
        ({"pan": ""}, "Pan is required"),
        ({"gender": "X"}, "Gender must be one of"),
        ({"password": "abc"}, "at least 6"),
        ({"dob": "17-08-1994"}, "Date of birth"),
    ],
)
def test_add_employee_validation(repos, overrides, message):
    with pytest.raises(ValidationError, match=message):
        repos.container().employee_service.add_employee(current_role=Role.HR, data={**_payload(1), **overrides})


def test_only_people_admins_manage_employees(repos):
    with pytest.raises(AuthorizationError):
        repos.container().employee_service.add_employee(current_role=Role.ACCOUNTS, data=_payload(1))


def test_failed_employee_insert_removes_user(repos):
    class BrokenEmployees(FakeEmployeeRepo):
        def create(self, **kwargs):
            raise RuntimeError("insert failed")

    service = EmployeeService(BrokenEmployees(repos.departments), repos.users, repos.departments)
    with pytest.raises(RuntimeError):
        service.add_employee(current_role=Role.ADMIN, data=_payload(1))
    assert repos.users.get_by_email("farah@hrms.local") is None


def test_update_syncs_user_account(repos):
    service = repos.container().employee_service
    employee_id = service.add_employee(current_role=Role.ADMIN, data=_payload(1))

    service.update_employee(
        current_role=Role.HR, employee_id=employee_id, data={"name": "Farah K", "role": "lead", "hod": "Ravi"}
    )

    employee = service.get_employee(employee_id)
    user = repos.users.get_by_id(employee.user_id)
    assert (employee.name, employee.role, employee.hod) == ("Farah K", Role.LEAD, "Ravi")
    assert (user.name, user.role, user.email) == ("Farah K", Role.LEAD, "farah@hrms.local")


def test_set_leave_balance_bounds(repos):
    employee = repos.add_employee(name="Asha Rao", emp_no=1001)
    service = repos.container().employee_service

    balance = service.set_leave_balance(current_role=Role.HR, emp_no=1001, values={"el": 75, "cl": "2.5"})
    assert balance.el == 75
    assert balance.cl == 2.5
    assert repos.employees.get_by_id(employee.employee_id).leave_balance == balance

    with pytest.raises(ValidationError, match="SL balance cannot exceed 15"):
        service.set_leave_balance(current_role=Role.HR, emp_no=1001, values={"sl": 16})
    with pytest.raises(ValidationError, match=">= 0"):
        service.set_leave_balance(current_role=Role.HR, emp_no=1001, values={"od": -1})
    with pytest.raises(ValidationError, match="Leave type"):
        service.set_leave_balance(current_role=Role.HR, emp_no=1001, values={"vacation": 1})


def test_journey_dates(repos):
    employee = repos.add_employee(name="Asha Rao")
    service = repos.container().employee_service

    service.update_journey(current_role=Role.HR, employee_id=employee.employee_id, data={"dol": "2025-03-31"})
    assert service.get_employee(employee.employee_id).has_left

    with pytest.raises(ValidationError, match="before date of joining"):
        service.update_journey(current_role=Role.HR, employee_id=employee.employee_id, data={"dol": "2019-01-01"})

    service.update_journey(current_role=Role.HR, employee_id=employee.employee_id, data={"dol": ""})
    assert service.get_employee(employee.employee_id).dol is None

    with pytest.raises(ValidationError, match="Nothing to update"):
        service.update_journey(current_role=Role.HR, employee_id=employee.employee_id, data={})
