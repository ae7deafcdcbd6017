from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access control."""

    ADMIN = "admin"
    ACCOUNTS = "accounts"
    HR = "hr"
    EMPLOYEE = "employee"
    LEAD = "lead"


class ApprovalStatus(str, Enum):
    """Status of a record going through the approval workflow."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveType(str, Enum):
    EL = "el"
    SL = "sl"
    CL = "cl"
    OD = "od"
    LWP = "lwp"
    LHD = "lhd"
    OTHERS = "others"

    @property
    def is_deductible(self) -> bool:
        """Deductible types consume balance; the rest are counters."""
        return self in DEDUCTIBLE_LEAVE_TYPES


DEDUCTIBLE_LEAVE_TYPES = frozenset({LeaveType.EL, LeaveType.SL, LeaveType.CL})


class AllowanceKind(str, Enum):
    VARIABLE = "variable"
    FIXED = "fixed"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    TRANSGENDER = "Transgender"


class MaritalStatus(str, Enum):
    SINGLE = "Single"
    MARRIED = "Married"
    DIVORCED = "Divorced"
    OTHERS = "Others"


class NotificationPriority(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class TravelMode(str, Enum):
    AIR = "Air"
    RAIL = "Rail"
    OTHER = "Other Mode"


class TicketProvider(str, Enum):
    CLIENT = "Client"
    KORUS = "KORUS"
