from __future__ import annotations

import pytest

from src.hrms.hrms.core.enums import Role
from src.hrms.hrms.main import create_app

from tests.fakes import FakeRepos


@pytest.fixture()
def repos():
    repos = FakeRepos()
    repos.add_employee(name="Asha Rao", password="secret123")
    repos.add_employee(name="Ravi Kumar", role=Role.LEAD, password="secret123")
    repos.add_employee(name="Neha Verma", role=Role.ADMIN, password="secret123")
    return repos


@pytest.fixture()
def client(repos, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=repos.container())
    return app.test_client()


def _login(client, email):
    res = client.post("/api/auth/login", json={"email": email, "password": "secret123"})
    assert res.status_code == 200, res.get_json()
    return res.get_json()["user"]


def test_requires_session(client):
    res = client.get("/api/auth/me")

    assert res.status_code == 401
    assert res.get_json() == {"success": False, "message": "Please log in to continue"}


def test_bad_login(client):
    res = client.post("/api/auth/login", json={"email": "asha@hrms.local", "password": "nope"})

    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_login_and_me(client):
    user = _login(client, "asha@hrms.local")
    assert user["role"] == "employee"

    me = client.get("/api/auth/me").get_json()
    assert me["success"] is True
    assert me["user"]["employee"]["name"] == "Asha Rao"
    assert me["user"]["employee"]["dob"] == "1990-01-01"

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_role_gate_returns_403(client):
    _login(client, "asha@hrms.local")

    assert client.get("/api/users").status_code == 403
    res = client.post("/api/holidays", json={"name": "Diwali", "date": "2025-10-20", "type": "Festival"})
    assert res.status_code == 403


def test_validation_error_envelope(client):
    _login(client, "asha@hrms.local")

    res = client.post("/api/leaves/apply/1", json={"start_date": "2025-03-05", "end_date": "2025-03-03"})

    assert res.status_code == 400
    body = res.get_json()
    assert body["success"] is False
    assert body["message"]


def test_unknown_record_is_404(client):
    _login(client, "neha@hrms.local")

    res = client.delete("/api/holidays/99")
    assert res.status_code == 404


def test_leave_flow(client, repos):
    _login(client, "asha@hrms.local")
    res = client.post(
        "/api/leaves/apply/1",
        json={
            "start_date": "2025-03-03",
            "end_date": "2025-03-04",
            "end_time": "13:00",
            "reason": "Travel",
            "type": "el",
            "applied_to": [2],
        },
    )
    assert res.status_code == 201
    leave_id = res.get_json()["leave_id"]

    preview = client.post("/api/leaves/days", json={"start_date": "2025-03-03", "end_date": "2025-03-04", "end_time": "13:00"})
    assert preview.get_json()["days"] == 1.5

    _login(client, "ravi@hrms.local")
    inbox = client.get("/api/leaves/approvals/2").get_json()["leaves"]
    assert [l["leave_id"] for l in inbox] == [leave_id]

    res = client.post(f"/api/leaves/{leave_id}/approve")
    assert res.status_code == 200
    assert res.get_json()["leave_status"] == "approved"
    assert repos.employees.get_by_id(1).leave_balance.el == 28.5


def test_holiday_crud_as_admin(client):
    _login(client, "neha@hrms.local")

    res = client.post(
        "/api/holidays", json={"name": "Diwali", "date": "2025-10-20", "type": "Festival", "is_recurring": "true"}
    )
    assert res.status_code == 201

    holidays = client.get("/api/holidays").get_json()["holidays"]
    assert holidays[0]["holiday_date"] == "2025-10-20"
    assert holidays[0]["is_recurring"] is True


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/salaries/user/2"),
        ("get", "/api/salaries"),
        ("get", "/api/users/2"),
        ("get", "/api/employees/user/2"),
        ("get", "/api/leaves/user/2"),
        ("post", "/api/leaves/apply/2"),
        ("get", "/api/travel/user/2"),
        ("post", "/api/helpdesk/user/2"),
        ("get", "/api/messages/user/2"),
        ("get", "/api/allowances/user/2"),
        ("get", "/api/ltc/employee/2"),
    ],
)
def test_other_users_records_are_forbidden(client, method, path):
    _login(client, "asha@hrms.local")

    res = getattr(client, method)(path, json={})

    assert res.status_code == 403
    assert res.get_json()["success"] is False


def test_own_records_and_staff_access(client, repos):
    repos.container().salary_service.add_salary(
        current_role=Role.HR,
        data={
            "employee_id": 2,
            "employee_type": "Permanent",
            "gross_salary": 40000,
            "basic_salary": 25000,
            "payable_days": 30,
            "payment_month": "January",
            "payment_year": "2025",
        },
    )

    _login(client, "ravi@hrms.local")
    assert len(client.get("/api/salaries/user/2").get_json()["salaries"]) == 1
    assert client.get("/api/salaries/1").status_code == 200
    assert client.get("/api/users/2").get_json()["user"]["employee"]["pan"] == "ABCDE1234F"

    _login(client, "asha@hrms.local")
    assert client.get("/api/salaries/1").status_code == 403

    _login(client, "neha@hrms.local")
    assert client.get("/api/salaries/user/2").status_code == 200
    assert client.get("/api/users/2").status_code == 200
