from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import ApprovalStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_json, normalize_mysql_time, to_json
from ..employees.model import LeaveBalance
from ..employees.mysql_refs import EMPLOYEE_REF_COLUMNS, employee_ref_from_row, employee_ref_join
from .model import Leave, LeaveRequest
from .repository import LeaveRepository

_SELECT = f"""
    SELECT l.leave_id, l.employee_id, l.start_date, l.start_time, l.end_date, l.end_time,
           l.reason, l.type, l.days, l.status, l.applied_to, l.approved_by, l.rejected_by,
           l.ror, l.created_at, {EMPLOYEE_REF_COLUMNS}
    FROM leaves l
    {employee_ref_join("l")}
"""


def _to_leave(row: Mapping[str, Any]) -> Leave:
    return Leave(
        leave_id=int(row["leave_id"]),
        employee_id=int(row["employee_id"]),
        start_date=row["start_date"],
        start_time=normalize_mysql_time(row["start_time"]),
        end_date=row["end_date"],
        end_time=normalize_mysql_time(row["end_time"]),
        reason=row["reason"],
        type=LeaveType(row["type"]),
        days=float(row["days"]),
        status=ApprovalStatus(row["status"]),
        applied_to=tuple(int(i) for i in from_json(row.get("applied_to"), [])),
        approved_by=row.get("approved_by"),
        rejected_by=row.get("rejected_by"),
        ror=row.get("ror"),
        employee=employee_ref_from_row(row),
        created_at=row.get("created_at"),
    )


def _request_params(request: LeaveRequest) -> tuple:
    return (
        request.start_date,
        request.start_time,
        request.end_date,
        request.end_time,
        request.reason,
        request.type.value,
        request.days,
        to_json(list(request.applied_to)),
    )


def _update_status(cur, leave_id, status: ApprovalStatus, approved_by: Optional[str], rejected_by: Optional[str]) -> None:
    cur.execute(
        """
        UPDATE leaves
        SET status=%s,
            approved_by=COALESCE(%s, approved_by),
            rejected_by=COALESCE(%s, rejected_by)
        WHERE leave_id=%s
        """,
        (status.value, approved_by, rejected_by, int(leave_id)),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY l.created_at DESC, l.leave_id DESC")
            return [_to_leave(r) for r in fetchall(cur)]

    def get_by_id(self, leave_id: int) -> Optional[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE l.leave_id=%s", (int(leave_id),))
            row = fetchone(cur)
            return _to_leave(row) if row else None

    def list_for_employee(self, employee_id: int) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE l.employee_id=%s ORDER BY l.start_date DESC, l.leave_id DESC",
                (int(employee_id),),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_for_approver(self, approver_employee_id: int) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE JSON_CONTAINS(l.applied_to, CAST(%s AS JSON))
                ORDER BY l.created_at DESC, l.leave_id DESC
                """,
                (str(int(approver_employee_id)),),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def create(self, *, employee_id: int, request: LeaveRequest) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(
                    employee_id, start_date, start_time, end_date, end_time,
                    reason, type, days, applied_to, status
                ) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,'pending')
                """,
                (int(employee_id), *_request_params(request)),
            )
            return int(cur.lastrowid)

    def update(self, leave_id: int, *, request: LeaveRequest) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET start_date=%s, start_time=%s, end_date=%s, end_time=%s,
                    reason=%s, type=%s, days=%s, applied_to=%s
                WHERE leave_id=%s
                """,
                (*_request_params(request), int(leave_id)),
            )
            return cur.rowcount >= 0

    def set_status(
        self,
        leave_id: int,
        *,
        status: ApprovalStatus,
        approved_by: Optional[str] = None,
        rejected_by: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            _update_status(cur, leave_id, status, approved_by, rejected_by)
            return cur.rowcount > 0

    def set_status_with_balance(
        self,
        leave_id: int,
        *,
        employee_id: int,
        balance: LeaveBalance,
        status: ApprovalStatus,
        approved_by: Optional[str] = None,
        rejected_by: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET leave_balance=%s WHERE employee_id=%s",
                (to_json(balance.to_dict()), int(employee_id)),
            )
            _update_status(cur, leave_id, status, approved_by, rejected_by)
            return cur.rowcount > 0

    def set_ror(self, leave_id: int, *, ror: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE leaves SET ror=%s WHERE leave_id=%s", (ror, int(leave_id)))
            return cur.rowcount >= 0

    def delete_by_id(self, leave_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leaves WHERE leave_id=%s", (int(leave_id),))
            return cur.rowcount > 0
