from __future__ import annotations

from flask import Flask

from ..common.http import current_name, current_role, json_body, login_required, ok, require_own_employee_or
from ..container import Container
from ..core.permissions import CLAIM_APPROVERS


def register(app: Flask, container: Container) -> None:
    service = container.ltc_service

    @app.route("/api/ltc", methods=["GET"], endpoint="ltc_list")
    @login_required
    def list_claims():
        return ok(ltcs=service.list_claims())

    @app.route("/api/ltc/employee/<int:employee_id>", methods=["GET"], endpoint="ltc_for_employee")
    @login_required
    def claims_for_employee(employee_id: int):
        require_own_employee_or(employee_id, CLAIM_APPROVERS)
        return ok(ltcs=service.list_for_employee(employee_id))

    @app.route("/api/ltc/<int:ltc_id>", methods=["GET"], endpoint="ltc_get")
    @login_required
    def get_claim(ltc_id: int):
        return ok(ltc=service.get_claim(ltc_id))

    @app.route("/api/ltc", methods=["POST"], endpoint="ltc_add")
    @login_required
    def add_claim():
        ltc_id = service.add_claim(json_body())
        return ok("LTC record added", status=201, ltc_id=ltc_id)

    @app.route("/api/ltc/<int:ltc_id>", methods=["PUT"], endpoint="ltc_update")
    @login_required
    def update_claim(ltc_id: int):
        service.update_claim(ltc_id=ltc_id, data=json_body())
        return ok("LTC record updated")

    @app.route("/api/ltc/<int:ltc_id>", methods=["DELETE"], endpoint="ltc_delete")
    @login_required
    def delete_claim(ltc_id: int):
        service.delete_claim(ltc_id=ltc_id)
        return ok("LTC record deleted")

    @app.route("/api/ltc/<int:ltc_id>/<action>", methods=["POST"], endpoint="ltc_decide")
    @login_required
    def decide(ltc_id: int, action: str):
        status = service.decide(
            current_role=current_role(),
            approver_name=current_name(),
            ltc_id=ltc_id,
            action=action,
            remarks=json_body().get("remarks"),
        )
        return ok(f"LTC {status.value}", ltc_status=status)
