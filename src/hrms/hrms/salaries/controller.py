from __future__ import annotations

from flask import Flask

from ..common.http import (
    current_role,
    json_body,
    login_required,
    ok,
    require_own_employee_or,
    require_self_or,
    roles_required,
)
from ..container import Container
from ..core.permissions import PAYROLL_EDITORS


def register(app: Flask, container: Container) -> None:
    service = container.salary_service

    @app.route("/api/salaries", methods=["GET"], endpoint="salaries_list")
    @roles_required(*PAYROLL_EDITORS)
    def list_salaries():
        return ok(salaries=service.list_salaries())

    @app.route("/api/salaries/user/<int:user_id>", methods=["GET"], endpoint="salaries_for_user")
    @login_required
    def salaries_for_user(user_id: int):
        require_self_or(user_id, PAYROLL_EDITORS)
        return ok(salaries=service.list_for_user(user_id))

    @app.route("/api/salaries/<int:salary_id>", methods=["GET"], endpoint="salaries_get")
    @login_required
    def get_salary(salary_id: int):
        salary = service.get_salary(salary_id)
        require_own_employee_or(salary.employee_id, PAYROLL_EDITORS)
        return ok(salary=salary.to_dict())

    @app.route("/api/salaries", methods=["POST"], endpoint="salaries_add")
    @login_required
    def add_salary():
        salary_id = service.add_salary(current_role=current_role(), data=json_body())
        return ok("Salary added", status=201, salary_id=salary_id)

    @app.route("/api/salaries/<int:salary_id>", methods=["PUT"], endpoint="salaries_update")
    @login_required
    def update_salary(salary_id: int):
        service.update_salary(current_role=current_role(), salary_id=salary_id, data=json_body())
        return ok("Salary updated")

    @app.route("/api/salaries/<int:salary_id>", methods=["DELETE"], endpoint="salaries_delete")
    @login_required
    def delete_salary(salary_id: int):
        service.delete_salary(current_role=current_role(), salary_id=salary_id)
        return ok("Salary deleted")
