from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Appraisal, AppraisalDraft


class AppraisalRepository(Protocol):
    def list_all(self) -> Sequence[Appraisal]:
        raise NotImplementedError

    def get_by_id(self, appraisal_id: int) -> Optional[Appraisal]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[Appraisal]:
        raise NotImplementedError

    def list_for_supervisor(self, supervisor_employee_id: int) -> Sequence[Appraisal]:
        raise NotImplementedError

    def create(self, draft: AppraisalDraft) -> int:
        raise NotImplementedError

    def update(self, appraisal_id: int, draft: AppraisalDraft) -> bool:
        raise NotImplementedError

    def delete_by_id(self, appraisal_id: int) -> bool:
        raise NotImplementedError
