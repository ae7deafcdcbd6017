from __future__ import annotations

from flask import Flask

from ..common.http import current_role, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.notification_service

    @app.route("/api/notifications", methods=["GET"], endpoint="notifications_list")
    @login_required
    def list_notifications():
        return ok(notifications=service.list_notifications())

    @app.route("/api/notifications", methods=["POST"], endpoint="notifications_add")
    @login_required
    def add_notification():
        notification_id = service.add_notification(current_role=current_role(), data=json_body())
        return ok("Notification added", status=201, notification_id=notification_id)
