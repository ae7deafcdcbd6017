from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Tuple

from ..common.refs import EmployeeRef
from ..core.enums import ApprovalStatus, TicketProvider, TravelMode


@dataclass(frozen=True)
class ExpenseItem:
    date: Optional[date]
    description: str
    amount: float


def travel_total(expenses: Iterable[ExpenseItem], day_charges: Iterable[ExpenseItem]) -> float:
    return sum(e.amount for e in expenses) + sum(d.amount for d in day_charges)


@dataclass(frozen=True)
class TravelDraft:
    employee_id: int
    department_id: int
    place_of_visit: str
    client_name: str
    project_no: str
    start_date: Optional[date]
    return_date: Optional[date]
    purpose_of_visit: str
    travel_mode: TravelMode
    ticket_provided_by: TicketProvider
    deputation_charges: bool
    accompanied_team_members: Tuple[str, ...]
    expenses: Tuple[ExpenseItem, ...]
    day_charges: Tuple[ExpenseItem, ...]
    claimed_from_client: bool = False


@dataclass(frozen=True)
class TravelExpenditure:
    travel_id: int
    employee_id: int
    department_id: int
    place_of_visit: str
    client_name: str
    project_no: str
    start_date: Optional[date]
    return_date: Optional[date]
    purpose_of_visit: str
    travel_mode: TravelMode
    ticket_provided_by: TicketProvider
    deputation_charges: bool
    accompanied_team_members: Tuple[str, ...]
    expenses: Tuple[ExpenseItem, ...]
    day_charges: Tuple[ExpenseItem, ...]
    total_amount: float
    status: ApprovalStatus = ApprovalStatus.PENDING
    voucher_no: Optional[str] = None
    claimed_from_client: bool = False
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    remarks: Optional[str] = None
    employee: Optional[EmployeeRef] = None
    created_at: Optional[datetime] = None
