from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import ApprovalStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from ..employees.mysql_refs import EMPLOYEE_REF_COLUMNS, employee_ref_from_row, employee_ref_join
from .model import LtcClaim, LtcDraft
from .repository import LtcRepository

_SELECT = f"""
    SELECT c.ltc_id, c.employee_id, c.department_id, c.service_completion_from,
           c.service_completion_to, c.leave_period_from, c.leave_period_to,
           c.reimbursement_amount, c.status, c.approved_by, c.remarks, c.created_at,
           {EMPLOYEE_REF_COLUMNS}
    FROM ltc_claims c
    {employee_ref_join("c")}
"""


def _to_claim(row: Mapping[str, Any]) -> LtcClaim:
    return LtcClaim(
        ltc_id=int(row["ltc_id"]),
        employee_id=int(row["employee_id"]),
        department_id=int(row["department_id"]),
        service_completion_from=row["service_completion_from"],
        service_completion_to=row["service_completion_to"],
        leave_period_from=row["leave_period_from"],
        leave_period_to=row["leave_period_to"],
        reimbursement_amount=as_float(row["reimbursement_amount"]),
        status=ApprovalStatus(row["status"]),
        approved_by=row.get("approved_by"),
        remarks=row.get("remarks"),
        employee=employee_ref_from_row(row),
        created_at=row.get("created_at"),
    )


def _draft_params(draft: LtcDraft) -> tuple:
    return (
        draft.employee_id,
        draft.department_id,
        draft.service_completion_from,
        draft.service_completion_to,
        draft.leave_period_from,
        draft.leave_period_to,
        draft.reimbursement_amount,
    )


class MySQLLtcRepository(LtcRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[LtcClaim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY c.created_at DESC, c.ltc_id DESC")
            return [_to_claim(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[LtcClaim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE c.employee_id=%s ORDER BY c.created_at DESC, c.ltc_id DESC",
                (int(employee_id),),
            )
            return [_to_claim(r) for r in fetchall(cur)]

    def get_by_id(self, ltc_id: int) -> Optional[LtcClaim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE c.ltc_id=%s", (int(ltc_id),))
            row = fetchone(cur)
            return _to_claim(row) if row else None

    def create(self, draft: LtcDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO ltc_claims(
                    employee_id, department_id, service_completion_from, service_completion_to,
                    leave_period_from, leave_period_to, reimbursement_amount
                ) VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                _draft_params(draft),
            )
            return int(cur.lastrowid)

    def update(self, ltc_id: int, draft: LtcDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE ltc_claims
                SET employee_id=%s, department_id=%s, service_completion_from=%s,
                    service_completion_to=%s, leave_period_from=%s, leave_period_to=%s,
                    reimbursement_amount=%s
                WHERE ltc_id=%s
                """,
                (*_draft_params(draft), int(ltc_id)),
            )
            return cur.rowcount >= 0

    def set_status(
        self,
        ltc_id: int,
        *,
        status: ApprovalStatus,
        approved_by: str,
        remarks: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE ltc_claims SET status=%s, approved_by=%s, remarks=%s WHERE ltc_id=%s",
                (status.value, approved_by, remarks, int(ltc_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, ltc_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM ltc_claims WHERE ltc_id=%s", (int(ltc_id),))
            return cur.rowcount > 0
