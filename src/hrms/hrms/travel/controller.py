from __future__ import annotations

from flask import Flask

from ..common.http import current_name, current_role, json_body, login_required, ok, require_self_or
from ..container import Container
from ..core.permissions import CLAIM_APPROVERS


def register(app: Flask, container: Container) -> None:
    service = container.travel_service

    @app.route("/api/travel", methods=["GET"], endpoint="travel_list")
    @login_required
    def list_travels():
        return ok(travels=service.list_travels())

    @app.route("/api/travel/user/<int:user_id>", methods=["GET"], endpoint="travel_for_user")
    @login_required
    def travels_for_user(user_id: int):
        require_self_or(user_id, CLAIM_APPROVERS)
        return ok(travels=service.list_for_user(user_id))

    @app.route("/api/travel/user/<int:user_id>", methods=["POST"], endpoint="travel_add")
    @login_required
    def add_travel(user_id: int):
        require_self_or(user_id, CLAIM_APPROVERS)
        travel_id = service.add_travel(user_id=user_id, data=json_body())
        return ok("Travel expenditure added", status=201, travel_id=travel_id)

    @app.route("/api/travel/<int:travel_id>", methods=["GET"], endpoint="travel_get")
    @login_required
    def get_travel(travel_id: int):
        return ok(travel=service.get_travel(travel_id))

    @app.route("/api/travel/<int:travel_id>", methods=["PUT"], endpoint="travel_update")
    @login_required
    def update_travel(travel_id: int):
        service.update_travel(travel_id=travel_id, data=json_body())
        return ok("Travel expenditure updated")

    @app.route("/api/travel/<int:travel_id>", methods=["DELETE"], endpoint="travel_delete")
    @login_required
    def delete_travel(travel_id: int):
        service.delete_travel(travel_id=travel_id)
        return ok("Travel expenditure deleted")

    @app.route("/api/travel/<int:travel_id>/voucher", methods=["PUT"], endpoint="travel_voucher")
    @login_required
    def set_voucher(travel_id: int):
        service.set_voucher(
            current_role=current_role(),
            travel_id=travel_id,
            voucher_no=json_body().get("voucher_no", ""),
        )
        return ok("Voucher number saved")

    @app.route("/api/travel/<int:travel_id>/<action>", methods=["POST"], endpoint="travel_decide")
    @login_required
    def decide(travel_id: int, action: str):
        status = service.decide(
            current_role=current_role(),
            approver_name=current_name(),
            travel_id=travel_id,
            action=action,
            remarks=json_body().get("remarks"),
        )
        return ok(f"Travel expenditure {status.value}", travel_status=status)
