from __future__ import annotations

from flask import Flask

from ..common.http import current_role, json_body, login_required, ok, require_self_or
from ..container import Container
from ..core.permissions import PEOPLE_ADMINS


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @login_required
    def list_employees():
        return ok(employees=service.list_employees())

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @login_required
    def get_employee(employee_id: int):
        return ok(employee=service.get_employee(employee_id))

    @app.route("/api/employees/user/<int:user_id>", methods=["GET"], endpoint="employees_by_user")
    @login_required
    def get_by_user(user_id: int):
        require_self_or(user_id, PEOPLE_ADMINS)
        return ok(employee=service.get_by_user_id(user_id))

    @app.route("/api/employees", methods=["POST"], endpoint="employees_add")
    @login_required
    def add_employee():
        employee_id = service.add_employee(current_role=current_role(), data=json_body())
        return ok("Employee added", status=201, employee_id=employee_id)

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @login_required
    def update_employee(employee_id: int):
        service.update_employee(current_role=current_role(), employee_id=employee_id, data=json_body())
        return ok("Employee updated")

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @login_required
    def delete_employee(employee_id: int):
        service.delete_employee(current_role=current_role(), employee_id=employee_id)
        return ok("Employee deleted")

    @app.route("/api/employees/leave-balance/<int:emp_no>", methods=["PUT"], endpoint="employees_leave_balance")
    @login_required
    def set_leave_balance(emp_no: int):
        balance = service.set_leave_balance(current_role=current_role(), emp_no=emp_no, values=json_body())
        return ok("Leave balance updated", leave_balance=balance)

    @app.route("/api/employees/<int:employee_id>/journey", methods=["PUT"], endpoint="employees_journey")
    @login_required
    def update_journey(employee_id: int):
        service.update_journey(current_role=current_role(), employee_id=employee_id, data=json_body())
        return ok("Employee journey updated")
