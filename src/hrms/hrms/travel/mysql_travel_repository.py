from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_optional_date
from ..core.enums import ApprovalStatus, TicketProvider, TravelMode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, from_json, to_json
from ..employees.mysql_refs import EMPLOYEE_REF_COLUMNS, employee_ref_from_row, employee_ref_join
from .model import ExpenseItem, TravelDraft, TravelExpenditure, travel_total
from .repository import TravelRepository

_SELECT = f"""
    SELECT t.travel_id, t.employee_id, t.department_id, t.place_of_visit, t.client_name,
           t.project_no, t.start_date, t.return_date, t.purpose_of_visit, t.travel_mode,
           t.ticket_provided_by, t.deputation_charges, t.accompanied_team_members, t.expenses,
           t.day_charges, t.total_amount, t.status, t.voucher_no, t.claimed_from_client,
           t.approved_by, t.approved_at, t.remarks, t.created_at, {EMPLOYEE_REF_COLUMNS}
    FROM travel_expenditures t
    {employee_ref_join("t")}
"""


def _items(value: Any) -> tuple:
    return tuple(
        ExpenseItem(
            date=parse_optional_date(i.get("date"), "Expense date"),
            description=str(i.get("description") or ""),
            amount=as_float(i.get("amount")),
        )
        for i in from_json(value, [])
    )


def _items_json(items: Iterable[ExpenseItem]) -> str:
    return to_json([{"date": i.date, "description": i.description, "amount": i.amount} for i in items])


def _to_travel(row: Mapping[str, Any]) -> TravelExpenditure:
    return TravelExpenditure(
        travel_id=int(row["travel_id"]),
        employee_id=int(row["employee_id"]),
        department_id=int(row["department_id"]),
        place_of_visit=row["place_of_visit"],
        client_name=row["client_name"],
        project_no=row["project_no"],
        start_date=row.get("start_date"),
        return_date=row.get("return_date"),
        purpose_of_visit=row["purpose_of_visit"],
        travel_mode=TravelMode(row["travel_mode"]),
        ticket_provided_by=TicketProvider(row["ticket_provided_by"]),
        deputation_charges=row["deputation_charges"] == "Yes",
        accompanied_team_members=tuple(from_json(row.get("accompanied_team_members"), [])),
        expenses=_items(row.get("expenses")),
        day_charges=_items(row.get("day_charges")),
        total_amount=as_float(row.get("total_amount")),
        status=ApprovalStatus(row["status"]),
        voucher_no=row.get("voucher_no"),
        claimed_from_client=bool(row.get("claimed_from_client")),
        approved_by=row.get("approved_by"),
        approved_at=row.get("approved_at"),
        remarks=row.get("remarks"),
        employee=employee_ref_from_row(row),
        created_at=row.get("created_at"),
    )


def _draft_params(draft: TravelDraft) -> tuple:
    return (
        draft.employee_id,
        draft.department_id,
        draft.place_of_visit,
        draft.client_name,
        draft.project_no,
        draft.start_date,
        draft.return_date,
        draft.purpose_of_visit,
        draft.travel_mode.value,
        draft.ticket_provided_by.value,
        "Yes" if draft.deputation_charges else "No",
        to_json(list(draft.accompanied_team_members)),
        _items_json(draft.expenses),
        _items_json(draft.day_charges),
        travel_total(draft.expenses, draft.day_charges),
        1 if draft.claimed_from_client else 0,
    )


class MySQLTravelRepository(TravelRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[TravelExpenditure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY t.created_at DESC, t.travel_id DESC")
            return [_to_travel(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[TravelExpenditure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE t.employee_id=%s ORDER BY t.created_at DESC, t.travel_id DESC",
                (int(employee_id),),
            )
            return [_to_travel(r) for r in fetchall(cur)]

    def get_by_id(self, travel_id: int) -> Optional[TravelExpenditure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE t.travel_id=%s", (int(travel_id),))
            row = fetchone(cur)
            return _to_travel(row) if row else None

    def create(self, draft: TravelDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO travel_expenditures(
                    employee_id, department_id, place_of_visit, client_name, project_no,
                    start_date, return_date, purpose_of_visit, travel_mode, ticket_provided_by,
                    deputation_charges, accompanied_team_members, expenses, day_charges,
                    total_amount, claimed_from_client
                ) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _draft_params(draft),
            )
            return int(cur.lastrowid)

    def update(self, travel_id: int, draft: TravelDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE travel_expenditures
                SET employee_id=%s, department_id=%s, place_of_visit=%s, client_name=%s,
                    project_no=%s, start_date=%s, return_date=%s, purpose_of_visit=%s,
                    travel_mode=%s, ticket_provided_by=%s, deputation_charges=%s,
                    accompanied_team_members=%s, expenses=%s, day_charges=%s,
                    total_amount=%s, claimed_from_client=%s
                WHERE travel_id=%s
                """,
                (*_draft_params(draft), int(travel_id)),
            )
            return cur.rowcount >= 0

    def set_status(
        self,
        travel_id: int,
        *,
        status: ApprovalStatus,
        approved_by: str,
        approved_at: datetime,
        remarks: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE travel_expenditures
                SET status=%s, approved_by=%s, approved_at=%s, remarks=%s
                WHERE travel_id=%s
                """,
                (status.value, approved_by, approved_at, remarks, int(travel_id)),
            )
            return cur.rowcount > 0

    def set_voucher(self, travel_id: int, *, voucher_no: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE travel_expenditures SET voucher_no=%s WHERE travel_id=%s",
                (voucher_no, int(travel_id)),
            )
            return cur.rowcount >= 0

    def delete_by_id(self, travel_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM travel_expenditures WHERE travel_id=%s", (int(travel_id),))
            return cur.rowcount > 0
