from __future__ import annotations

import logging

from flask import Flask, session

from ..common.http import (
    current_role,
    current_user_id,
    json_body,
    login_required,
    ok,
    require_self_or,
    roles_required,
)
from ..container import Container
from ..core.enums import Role
from ..core.permissions import PEOPLE_ADMINS

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = json_body()
        user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session["user_id"] = user.user_id
        session["name"] = user.name
        session["role"] = user.role.value
        session["employee_id"] = user.employee_id
        logger.info("User %s logged in as %s", user.user_id, user.role.value)
        return ok("Logged in", user=user)

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        session.clear()
        return ok("Logged out")

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me():
        return ok(user=container.user_service.get_profile(current_user_id()))

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @roles_required(Role.ADMIN, Role.HR)
    def list_users():
        return ok(users=container.user_service.list_users())

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="users_get")
    @login_required
    def get_user(user_id: int):
        require_self_or(user_id, PEOPLE_ADMINS)
        return ok(user=container.user_service.get_profile(user_id))

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="users_delete")
    @login_required
    def delete_user(user_id: int):
        container.user_service.delete_user(
            current_role=current_role(), current_user_id=current_user_id(), user_id=user_id
        )
        return ok("User deleted")

    @app.route("/api/users/<int:user_id>/password", methods=["PUT"], endpoint="users_password")
    @login_required
    def change_password(user_id: int):
        data = json_body()
        container.user_service.change_password(
            current_user_id=current_user_id(),
            user_id=user_id,
            old_password=data.get("old_password", ""),
            new_password=data.get("new_password", ""),
        )
        return ok("Password updated")
