from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..core.constants import DEFAULT_LEAVE_BALANCE
from ..core.enums import Gender, LeaveType, MaritalStatus, Role

# Free-text profile fields that may be left empty.
OPTIONAL_PROFILE_FIELDS = (
    "official_email",
    "hod",
    "alt_contact_no",
    "permanent_address",
    "local_address",
    "passport_no",
    "nationality",
    "uan",
    "pf_no",
    "esi_no",
    "bank",
    "branch",
    "ifsc",
    "account_no",
    "reporting_person",
)

REQUIRED_PROFILE_FIELDS = (
    "name",
    "email",
    "designation",
    "qualification",
    "contact_no",
    "aadhar_no",
    "pan",
)


@dataclass(frozen=True)
class LeaveBalance:
    el: float = DEFAULT_LEAVE_BALANCE["el"]
    sl: float = DEFAULT_LEAVE_BALANCE["sl"]
    cl: float = DEFAULT_LEAVE_BALANCE["cl"]
    od: float = DEFAULT_LEAVE_BALANCE["od"]
    lwp: float = DEFAULT_LEAVE_BALANCE["lwp"]
    lhd: float = DEFAULT_LEAVE_BALANCE["lhd"]
    others: float = DEFAULT_LEAVE_BALANCE["others"]

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "LeaveBalance":
        values = dict(DEFAULT_LEAVE_BALANCE)
        for key, value in (data or {}).items():
            if key in values and value is not None:
                values[key] = float(value)
        return cls(**values)

    def get(self, leave_type: LeaveType) -> float:
        return float(getattr(self, leave_type.value))

    def adjusted(self, leave_type: LeaveType, delta: float) -> "LeaveBalance":
        return replace(self, **{leave_type.value: self.get(leave_type) + float(delta)})

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class Employee:
    employee_id: int
    user_id: int
    emp_no: int
    name: str
    email: str
    dob: date
    gender: Gender
    marital_status: MaritalStatus
    designation: str
    department_id: int
    qualification: str
    contact_no: str
    aadhar_no: str
    pan: str
    role: Role
    doj: date
    dol: Optional[date] = None
    leave_balance: LeaveBalance = field(default_factory=LeaveBalance)
    official_email: Optional[str] = None
    hod: Optional[str] = None
    alt_contact_no: Optional[str] = None
    permanent_address: Optional[str] = None
    local_address: Optional[str] = None
    passport_no: Optional[str] = None
    nationality: Optional[str] = None
    uan: Optional[str] = None
    pf_no: Optional[str] = None
    esi_no: Optional[str] = None
    bank: Optional[str] = None
    branch: Optional[str] = None
    ifsc: Optional[str] = None
    account_no: Optional[str] = None
    reporting_person: Optional[str] = None
    department_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def has_left(self) -> bool:
        return self.dol is not None
