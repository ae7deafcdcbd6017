from __future__ import annotations

from flask import Flask

from ..common.http import current_role, json_body, login_required, ok, require_self_or
from ..container import Container
from ..core.permissions import PEOPLE_ADMINS


def register(app: Flask, container: Container) -> None:
    service = container.message_service

    @app.route("/api/messages", methods=["GET"], endpoint="messages_list")
    @login_required
    def list_messages():
        return ok(messages=service.list_messages())

    @app.route("/api/messages/user/<int:user_id>", methods=["GET"], endpoint="messages_for_user")
    @login_required
    def messages_for_user(user_id: int):
        require_self_or(user_id, PEOPLE_ADMINS)
        return ok(messages=service.list_for_user(user_id))

    @app.route("/api/messages/user/<int:user_id>", methods=["POST"], endpoint="messages_send")
    @login_required
    def send_message(user_id: int):
        require_self_or(user_id, PEOPLE_ADMINS)
        message_id = service.send_message(user_id=user_id, data=json_body())
        return ok("Message sent", status=201, message_id=message_id)

    @app.route("/api/messages/<int:message_id>", methods=["GET"], endpoint="messages_get")
    @login_required
    def get_message(message_id: int):
        return ok(data=service.get_message(message_id))

    @app.route("/api/messages/<int:message_id>", methods=["PUT"], endpoint="messages_edit")
    @login_required
    def edit_message(message_id: int):
        service.edit_message(message_id=message_id, data=json_body())
        return ok("Message updated")

    @app.route("/api/messages/<int:message_id>", methods=["DELETE"], endpoint="messages_delete")
    @login_required
    def delete_message(message_id: int):
        service.delete_message(message_id=message_id)
        return ok("Message deleted")

    @app.route("/api/messages/<int:message_id>/reply", methods=["POST"], endpoint="messages_reply")
    @login_required
    def reply(message_id: int):
        service.reply(current_role=current_role(), message_id=message_id, reply=json_body().get("reply", ""))
        return ok("Reply saved")
