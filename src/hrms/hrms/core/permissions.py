from __future__ import annotations

from typing import Iterable

from .enums import Role
from .exceptions import AuthorizationError

PEOPLE_ADMINS = frozenset({Role.ADMIN, Role.HR})
LEAVE_APPROVERS = frozenset({Role.ADMIN, Role.HR, Role.LEAD})
ALLOWANCE_APPROVERS = frozenset({Role.ADMIN, Role.ACCOUNTS})
CLAIM_APPROVERS = frozenset({Role.ADMIN, Role.HR, Role.ACCOUNTS})
PAYROLL_EDITORS = frozenset({Role.ADMIN, Role.HR, Role.ACCOUNTS})
CTC_VIEWERS = frozenset({Role.ADMIN, Role.HR, Role.ACCOUNTS})


def require_role(current_role: Role, allowed: Iterable[Role]) -> None:
    if current_role not in frozenset(allowed):
        raise AuthorizationError("You do not have permission for this action")
