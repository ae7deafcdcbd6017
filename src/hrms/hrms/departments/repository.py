from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def get_by_id(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def get_by_code(self, department_code: str) -> Optional[Department]:
        raise NotImplementedError

    def create(self, *, department_code: str, department_name: str, description: Optional[str]) -> int:
        raise NotImplementedError

    def update(
        self,
        department_id: int,
        *,
        department_code: str,
        department_name: str,
        description: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, department_id: int) -> bool:
        raise NotImplementedError
