from __future__ import annotations

from flask import Flask

from ..common.http import current_name, current_role, current_user_id, json_body, login_required, ok, require_self_or
from ..container import Container
from ..core.permissions import PEOPLE_ADMINS


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/leaves", methods=["GET"], endpoint="leaves_list")
    @login_required
    def list_leaves():
        return ok(leaves=service.list_leaves())

    @app.route("/api/leaves/user/<int:user_id>", methods=["GET"], endpoint="leaves_for_user")
    @login_required
    def leaves_for_user(user_id: int):
        require_self_or(user_id, PEOPLE_ADMINS)
        return ok(leaves=service.list_for_user(user_id))

    @app.route("/api/leaves/approvals/<int:user_id>", methods=["GET"], endpoint="leaves_for_approver")
    @login_required
    def leaves_for_approver(user_id: int):
        require_self_or(user_id, PEOPLE_ADMINS)
        return ok(leaves=service.list_for_approver(user_id))

    @app.route("/api/leaves/days", methods=["POST"], endpoint="leaves_preview_days")
    @login_required
    def preview_days():
        return ok(days=service.preview_days(json_body()))

    @app.route("/api/leaves/apply/<int:user_id>", methods=["POST"], endpoint="leaves_apply")
    @login_required
    def apply_leave(user_id: int):
        require_self_or(user_id, PEOPLE_ADMINS)
        leave_id = service.apply_leave(user_id=user_id, data=json_body())
        return ok("Leave applied", status=201, leave_id=leave_id)

    @app.route("/api/leaves/<int:leave_id>", methods=["PUT"], endpoint="leaves_update")
    @login_required
    def update_leave(leave_id: int):
        service.update_leave(
            current_user_id=current_user_id(), current_role=current_role(), leave_id=leave_id, data=json_body()
        )
        return ok("Leave updated")

    @app.route("/api/leaves/<int:leave_id>", methods=["DELETE"], endpoint="leaves_delete")
    @login_required
    def delete_leave(leave_id: int):
        service.delete_leave(current_user_id=current_user_id(), current_role=current_role(), leave_id=leave_id)
        return ok("Leave deleted")

    @app.route("/api/leaves/<int:leave_id>/ror", methods=["PUT"], endpoint="leaves_ror")
    @login_required
    def set_ror(leave_id: int):
        service.set_ror(
            current_user_id=current_user_id(),
            current_role=current_role(),
            leave_id=leave_id,
            ror=json_body().get("ror", ""),
        )
        return ok("Reason of rejection saved")

    @app.route("/api/leaves/<int:leave_id>/<action>", methods=["POST"], endpoint="leaves_decide")
    @login_required
    def decide(leave_id: int, action: str):
        status = service.decide(
            current_user_id=current_user_id(),
            current_role=current_role(),
            approver_name=current_name(),
            leave_id=leave_id,
            action=action,
        )
        return ok(f"Leave {status.value}", leave_status=status)
