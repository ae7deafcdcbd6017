from __future__ import annotations

from .enums import ApprovalStatus
from .exceptions import ValidationError

_ALLOWED = {
    ApprovalStatus.PENDING: frozenset({ApprovalStatus.APPROVED, ApprovalStatus.REJECTED}),
    ApprovalStatus.APPROVED: frozenset({ApprovalStatus.REJECTED}),
    ApprovalStatus.REJECTED: frozenset(),
}

_ACTIONS = {
    "approve": ApprovalStatus.APPROVED,
    "approved": ApprovalStatus.APPROVED,
    "reject": ApprovalStatus.REJECTED,
    "rejected": ApprovalStatus.REJECTED,
}


def parse_action(action: str) -> ApprovalStatus:
    """Map an URL action ('approve', 'rejected', ...) to the target status."""
    target = _ACTIONS.get((action or "").strip().lower())
    if target is None:
        raise ValidationError("Invalid action. Must be 'approve' or 'reject'.")
    return target


def ensure_transition(current: ApprovalStatus, target: ApprovalStatus) -> None:
    if target not in _ALLOWED[current]:
        raise ValidationError(f"Cannot move a {current.value} record to {target.value}")
