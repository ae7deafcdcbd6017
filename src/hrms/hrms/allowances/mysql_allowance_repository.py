from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import AllowanceKind, ApprovalStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from ..employees.mysql_refs import EMPLOYEE_REF_COLUMNS, employee_ref_from_row, employee_ref_join
from .model import Allowance, AllowanceDraft
from .repository import AllowanceRepository

_TABLES = {
    AllowanceKind.VARIABLE: "allowances",
    AllowanceKind.FIXED: "fixed_allowances",
}


class MySQLAllowanceRepository(AllowanceRepository):
    """Same statements against ``allowances`` or ``fixed_allowances``."""

    def __init__(self, conn_factory: DatabaseConnection, kind: AllowanceKind):
        self._conn_factory = conn_factory
        self.kind = kind
        self._table = _TABLES[kind]
        self._select = f"""
            SELECT a.allowance_id, a.employee_id, a.client, a.project_no, a.allowance_month,
                   a.allowance_year, a.allowance_type, a.allowance_amount, a.status, a.voucher_no,
                   a.added_by, a.created_at, {EMPLOYEE_REF_COLUMNS}
            FROM {self._table} a
            {employee_ref_join("a")}
        """

    def _to_allowance(self, row: Mapping[str, Any]) -> Allowance:
        return Allowance(
            allowance_id=int(row["allowance_id"]),
            kind=self.kind,
            employee_id=int(row["employee_id"]),
            client=row.get("client") or "",
            project_no=row.get("project_no") or "",
            allowance_month=row["allowance_month"],
            allowance_year=str(row["allowance_year"]),
            allowance_type=row["allowance_type"],
            allowance_amount=as_float(row["allowance_amount"]),
            status=ApprovalStatus(row["status"]),
            voucher_no=row.get("voucher_no") or "",
            added_by=row.get("added_by"),
            employee=employee_ref_from_row(row),
            created_at=row.get("created_at"),
        )

    def list_all(self) -> Sequence[Allowance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{self._select} ORDER BY a.created_at DESC, a.allowance_id DESC")
            return [self._to_allowance(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[Allowance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{self._select} WHERE a.employee_id=%s ORDER BY a.created_at DESC, a.allowance_id DESC",
                (int(employee_id),),
            )
            return [self._to_allowance(r) for r in fetchall(cur)]

    def get_by_id(self, allowance_id: int) -> Optional[Allowance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{self._select} WHERE a.allowance_id=%s", (int(allowance_id),))
            row = fetchone(cur)
            return self._to_allowance(row) if row else None

    def find_matching(self, draft: AllowanceDraft) -> Optional[Allowance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {self._select}
                WHERE a.employee_id=%s AND a.client=%s AND a.project_no=%s
                  AND a.allowance_month=%s AND a.allowance_year=%s AND a.allowance_type=%s
                ORDER BY a.allowance_id
                LIMIT 1
                """,
                draft.merge_key(),
            )
            row = fetchone(cur)
            return self._to_allowance(row) if row else None

    def create(self, draft: AllowanceDraft, *, status: ApprovalStatus, added_by: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {self._table}(
                    employee_id, client, project_no, allowance_month, allowance_year,
                    allowance_type, allowance_amount, status, added_by
                ) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (*draft.merge_key(), draft.allowance_amount, status.value, added_by),
            )
            return int(cur.lastrowid)

    def update(self, allowance_id: int, draft: AllowanceDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE {self._table}
                SET employee_id=%s, client=%s, project_no=%s, allowance_month=%s,
                    allowance_year=%s, allowance_type=%s, allowance_amount=%s
                WHERE allowance_id=%s
                """,
                (*draft.merge_key(), draft.allowance_amount, int(allowance_id)),
            )
            return cur.rowcount >= 0

    def add_amount(self, allowance_id: int, *, amount: float, status: ApprovalStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {self._table} SET allowance_amount=allowance_amount+%s, status=%s WHERE allowance_id=%s",
                (amount, status.value, int(allowance_id)),
            )
            return cur.rowcount > 0

    def set_status(self, allowance_id: int, *, status: ApprovalStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {self._table} SET status=%s WHERE allowance_id=%s",
                (status.value, int(allowance_id)),
            )
            return cur.rowcount > 0

    def set_voucher(self, allowance_id: int, *, voucher_no: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {self._table} SET voucher_no=%s WHERE allowance_id=%s",
                (voucher_no, int(allowance_id)),
            )
            return cur.rowcount >= 0

    def delete_by_id(self, allowance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self._table} WHERE allowance_id=%s", (int(allowance_id),))
            return cur.rowcount > 0
