from __future__ import annotations

from flask import Flask

from ..common.http import current_role, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.holiday_service

    @app.route("/api/holidays", methods=["GET"], endpoint="holidays_list")
    @login_required
    def list_holidays():
        return ok(holidays=service.list_holidays())

    @app.route("/api/holidays", methods=["POST"], endpoint="holidays_add")
    @login_required
    def add_holiday():
        holiday_id = service.add_holiday(current_role=current_role(), data=json_body())
        return ok("Holiday added", status=201, holiday_id=holiday_id)

    @app.route("/api/holidays/<int:holiday_id>", methods=["PUT"], endpoint="holidays_edit")
    @login_required
    def edit_holiday(holiday_id: int):
        service.edit_holiday(current_role=current_role(), holiday_id=holiday_id, data=json_body())
        return ok("Holiday updated")

    @app.route("/api/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="holidays_delete")
    @login_required
    def delete_holiday(holiday_id: int):
        service.delete_holiday(current_role=current_role(), holiday_id=holiday_id)
        return ok("Holiday deleted")
