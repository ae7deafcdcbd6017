from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    role: Role
    employee_id: Optional[int]


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository, employees: EmployeeRepository):
        self._users = users
        self._employees = employees

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_non_empty(email, "Email").lower()
        user = self._users.get_by_email(email)
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            matched = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # Placeholder or corrupted hash values in the table.
            matched = False
        if not matched:
            raise AuthenticationError("Invalid email or password")

        employee = self._employees.get_by_user_id(user.user_id)
        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            role=user.role,
            employee_id=employee.employee_id if employee else None,
        )


class UserService:
    """Use case: manage user accounts."""

    def __init__(self, users: UserRepository, employees: EmployeeRepository):
        self._users = users
        self._employees = employees

    def list_users(self):
        return [u.to_public() for u in self._users.list_all()]

    def get_profile(self, user_id: int) -> dict[str, Any]:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        profile = user.to_public()
        profile["employee"] = self._employees.get_by_user_id(user_id)
        return profile

    def change_password(self, *, current_user_id: int, user_id: int, old_password: str, new_password: str) -> None:
        if int(current_user_id) != int(user_id):
            raise AuthorizationError("You can only change your own password")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if not check_password_hash(user.password_hash, old_password or ""):
            raise ValidationError("Old password is incorrect")
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        self._users.update_password(user_id, password_hash=generate_password_hash(new_password))

    def delete_user(self, *, current_role: Role, current_user_id: int, user_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can delete accounts")
        if int(current_user_id) == int(user_id):
            raise ValidationError("You cannot delete your own account")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if not self._users.delete_by_id(user_id):
            raise ValidationError("Failed to delete user")
