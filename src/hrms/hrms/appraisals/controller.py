from __future__ import annotations

from flask import Flask

from ..common.http import current_role, json_body, login_required, ok, require_self_or
from ..container import Container
from ..core.permissions import PEOPLE_ADMINS


def register(app: Flask, container: Container) -> None:
    service = container.appraisal_service

    @app.route("/api/appraisals", methods=["GET"], endpoint="appraisals_list")
    @login_required
    def list_appraisals():
        return ok(appraisals=service.list_appraisals())

    @app.route("/api/appraisals/user/<int:user_id>", methods=["GET"], endpoint="appraisals_for_user")
    @login_required
    def appraisals_for_user(user_id: int):
        require_self_or(user_id, PEOPLE_ADMINS)
        return ok(appraisals=service.list_for_user(user_id))

    @app.route("/api/appraisals/lead/<int:user_id>", methods=["GET"], endpoint="appraisals_for_lead")
    @login_required
    def appraisals_for_lead(user_id: int):
        require_self_or(user_id, PEOPLE_ADMINS)
        return ok(appraisals=service.list_for_supervisor(user_id))

    @app.route("/api/appraisals", methods=["POST"], endpoint="appraisals_add")
    @login_required
    def add_appraisal():
        appraisal_id = service.add_appraisal(current_role=current_role(), data=json_body())
        return ok("Appraisal added", status=201, appraisal_id=appraisal_id)

    @app.route("/api/appraisals/<int:appraisal_id>", methods=["PUT"], endpoint="appraisals_edit")
    @login_required
    def edit_appraisal(appraisal_id: int):
        service.edit_appraisal(current_role=current_role(), appraisal_id=appraisal_id, data=json_body())
        return ok("Appraisal updated")

    @app.route("/api/appraisals/<int:appraisal_id>", methods=["DELETE"], endpoint="appraisals_delete")
    @login_required
    def delete_appraisal(appraisal_id: int):
        service.delete_appraisal(current_role=current_role(), appraisal_id=appraisal_id)
        return ok("Appraisal deleted")
