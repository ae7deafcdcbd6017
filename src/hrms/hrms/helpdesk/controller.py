from __future__ import annotations

from flask import Flask

from ..common.http import current_role, json_body, login_required, ok, require_self_or
from ..container import Container
from ..core.permissions import PEOPLE_ADMINS


def register(app: Flask, container: Container) -> None:
    service = container.helpdesk_service

    @app.route("/api/helpdesk", methods=["GET"], endpoint="helpdesk_list")
    @login_required
    def list_tickets():
        return ok(helps=service.list_tickets())

    @app.route("/api/helpdesk/user/<int:user_id>", methods=["GET"], endpoint="helpdesk_for_user")
    @login_required
    def tickets_for_user(user_id: int):
        require_self_or(user_id, PEOPLE_ADMINS)
        return ok(helps=service.list_for_user(user_id))

    @app.route("/api/helpdesk/user/<int:user_id>", methods=["POST"], endpoint="helpdesk_raise")
    @login_required
    def raise_query(user_id: int):
        require_self_or(user_id, PEOPLE_ADMINS)
        help_id = service.raise_query(user_id=user_id, query=json_body().get("query", ""))
        return ok("Query submitted", status=201, help_id=help_id)

    @app.route("/api/helpdesk/<int:ticket_id>", methods=["PUT"], endpoint="helpdesk_update")
    @login_required
    def update_query(ticket_id: int):
        service.update_query(ticket_id=ticket_id, query=json_body().get("query", ""))
        return ok("Query updated")

    @app.route("/api/helpdesk/<int:ticket_id>", methods=["DELETE"], endpoint="helpdesk_delete")
    @login_required
    def delete_ticket(ticket_id: int):
        service.delete_ticket(ticket_id=ticket_id)
        return ok("Query deleted")

    @app.route("/api/helpdesk/<int:ticket_id>/resolve", methods=["POST"], endpoint="helpdesk_resolve")
    @login_required
    def resolve(ticket_id: int):
        service.resolve(current_role=current_role(), ticket_id=ticket_id)
        return ok("Query resolved")

    @app.route("/api/helpdesk/<int:ticket_id>/respond", methods=["POST"], endpoint="helpdesk_respond")
    @login_required
    def respond(ticket_id: int):
        service.respond(current_role=current_role(), ticket_id=ticket_id, response=json_body().get("response", ""))
        return ok("Response sent")
