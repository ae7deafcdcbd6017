from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus
from .model import LtcClaim, LtcDraft


class LtcRepository(Protocol):
    def list_all(self) -> Sequence[LtcClaim]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[LtcClaim]:
        raise NotImplementedError

    def get_by_id(self, ltc_id: int) -> Optional[LtcClaim]:
        raise NotImplementedError

    def create(self, draft: LtcDraft) -> int:
        raise NotImplementedError

    def update(self, ltc_id: int, draft: LtcDraft) -> bool:
        raise NotImplementedError

    def set_status(
        self,
        ltc_id: int,
        *,
        status: ApprovalStatus,
        approved_by: str,
        remarks: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, ltc_id: int) -> bool:
        raise NotImplementedError
