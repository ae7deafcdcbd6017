from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus
from .model import TravelDraft, TravelExpenditure


class TravelRepository(Protocol):
    """Implementations derive ``total_amount`` from the draft's line items on every save."""

    def list_all(self) -> Sequence[TravelExpenditure]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[TravelExpenditure]:
        raise NotImplementedError

    def get_by_id(self, travel_id: int) -> Optional[TravelExpenditure]:
        raise NotImplementedError

    def create(self, draft: TravelDraft) -> int:
        raise NotImplementedError

    def update(self, travel_id: int, draft: TravelDraft) -> bool:
        raise NotImplementedError

    def set_status(
        self,
        travel_id: int,
        *,
        status: ApprovalStatus,
        approved_by: str,
        approved_at: datetime,
        remarks: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def set_voucher(self, travel_id: int, *, voucher_no: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, travel_id: int) -> bool:
        raise NotImplementedError
