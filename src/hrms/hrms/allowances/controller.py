from __future__ import annotations

from flask import Flask

from ..common.http import current_name, current_role, json_body, login_required, ok, require_self_or
from ..container import Container
from ..core.permissions import PAYROLL_EDITORS
from .service import AllowanceService


def _register_routes(app: Flask, service: AllowanceService, *, prefix: str, name: str) -> None:
    @app.route(f"/api/{prefix}", methods=["GET"], endpoint=f"{name}_list")
    @login_required
    def list_allowances():
        return ok(allowances=service.list_allowances())

    @app.route(f"/api/{prefix}/user/<int:user_id>", methods=["GET"], endpoint=f"{name}_for_user")
    @login_required
    def allowances_for_user(user_id: int):
        require_self_or(user_id, PAYROLL_EDITORS)
        return ok(allowances=service.list_for_user(user_id))

    @app.route(f"/api/{prefix}", methods=["POST"], endpoint=f"{name}_add")
    @login_required
    def add_allowance():
        allowance_id = service.add_allowance(current_role=current_role(), added_by=current_name(), data=json_body())
        return ok("Allowance saved", status=201, allowance_id=allowance_id)

    @app.route(f"/api/{prefix}/<int:allowance_id>", methods=["PUT"], endpoint=f"{name}_update")
    @login_required
    def update_allowance(allowance_id: int):
        service.update_allowance(current_role=current_role(), allowance_id=allowance_id, data=json_body())
        return ok("Allowance updated")

    @app.route(f"/api/{prefix}/<int:allowance_id>", methods=["DELETE"], endpoint=f"{name}_delete")
    @login_required
    def delete_allowance(allowance_id: int):
        service.delete_allowance(current_role=current_role(), allowance_id=allowance_id)
        return ok("Allowance deleted")

    @app.route(f"/api/{prefix}/<int:allowance_id>/voucher", methods=["PUT"], endpoint=f"{name}_voucher")
    @login_required
    def set_voucher(allowance_id: int):
        service.set_voucher(
            current_role=current_role(),
            allowance_id=allowance_id,
            voucher_no=json_body().get("voucher_no", ""),
        )
        return ok("Voucher number saved")


def register(app: Flask, container: Container) -> None:
    variable = container.allowance_service
    _register_routes(app, variable, prefix="allowances", name="allowances")
    _register_routes(app, container.fixed_allowance_service, prefix="fixed-allowances", name="fixed_allowances")

    @app.route("/api/allowances/<int:allowance_id>/<action>", methods=["POST"], endpoint="allowances_decide")
    @login_required
    def decide(allowance_id: int, action: str):
        status = variable.decide(current_role=current_role(), allowance_id=allowance_id, action=action)
        return ok(f"Allowance {status.value}", allowance_status=status)
