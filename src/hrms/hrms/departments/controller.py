from __future__ import annotations

from flask import Flask

from ..common.http import current_role, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.department_service

    @app.route("/api/departments", methods=["GET"], endpoint="departments_list")
    @login_required
    def list_departments():
        return ok(departments=service.list_departments())

    @app.route("/api/departments/<int:department_id>", methods=["GET"], endpoint="departments_get")
    @login_required
    def get_department(department_id: int):
        return ok(department=service.get_department(department_id))

    @app.route("/api/departments", methods=["POST"], endpoint="departments_add")
    @login_required
    def add_department():
        department_id = service.add_department(current_role=current_role(), data=json_body())
        return ok("Department added", status=201, department_id=department_id)

    @app.route("/api/departments/<int:department_id>", methods=["PUT"], endpoint="departments_update")
    @login_required
    def update_department(department_id: int):
        service.update_department(current_role=current_role(), department_id=department_id, data=json_body())
        return ok("Department updated")

    @app.route("/api/departments/<int:department_id>", methods=["DELETE"], endpoint="departments_delete")
    @login_required
    def delete_department(department_id: int):
        service.delete_department(current_role=current_role(), department_id=department_id)
        return ok("Department deleted")
