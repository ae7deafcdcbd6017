from __future__ import annotations

import pytest

from src.hrms.hrms.core.enums import ApprovalStatus
from src.hrms.hrms.core.exceptions import ValidationError
from src.hrms.hrms.core.workflow import ensure_transition, parse_action


@pytest.mark.parametrize(
    "action, expected",
    [
        ("approve", ApprovalStatus.APPROVED),
        ("Approved", ApprovalStatus.APPROVED),
        (" reject ", ApprovalStatus.REJECTED),
        ("rejected", ApprovalStatus.REJECTED),
    ],
)
def test_parse_action(action, expected):
    assert parse_action(action) == expected


@pytest.mark.parametrize("action", ["", None, "cancel", "pending"])
def test_parse_action_rejects_unknown(action):
    with pytest.raises(ValidationError):
        parse_action(action)


@pytest.mark.parametrize(
    "current, target",
    [
        (ApprovalStatus.PENDING, ApprovalStatus.APPROVED),
        (ApprovalStatus.PENDING, ApprovalStatus.REJECTED),
        (ApprovalStatus.APPROVED, ApprovalStatus.REJECTED),
    ],
)
def test_allowed_transitions(current, target):
    ensure_transition(current, target)


@pytest.mark.parametrize(
    "current, target",
    [
        (ApprovalStatus.APPROVED, ApprovalStatus.APPROVED),
        (ApprovalStatus.REJECTED, ApprovalStatus.APPROVED),
        (ApprovalStatus.REJECTED, ApprovalStatus.REJECTED),
        (ApprovalStatus.PENDING, ApprovalStatus.PENDING),
    ],
)
def test_blocked_transitions(current, target):
    with pytest.raises(ValidationError, match="Cannot move"):
        ensure_transition(current, target)
