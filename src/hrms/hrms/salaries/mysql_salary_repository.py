from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, from_json, to_json
from ..employees.mysql_refs import EMPLOYEE_REF_COLUMNS, employee_ref_from_row, employee_ref_join
from .model import LineItem, Salary, SalaryDraft
from .repository import SalaryRepository

_SELECT = f"""
    SELECT s.salary_id, s.employee_id, s.employee_type, s.gross_salary, s.basic_salary,
           s.payable_days, s.allowances, s.deductions, s.payment_month, s.payment_year,
           s.created_at, {EMPLOYEE_REF_COLUMNS}
    FROM salaries s
    {employee_ref_join("s")}
"""


def _items(value: Any) -> tuple:
    return tuple(
        LineItem(name=str(i.get("name") or ""), amount=as_float(i.get("amount")))
        for i in from_json(value, [])
    )


def _items_json(items: Iterable[LineItem]) -> str:
    return to_json([{"name": i.name, "amount": i.amount} for i in items])


def _to_salary(row: Mapping[str, Any]) -> Salary:
    return Salary(
        salary_id=int(row["salary_id"]),
        employee_id=int(row["employee_id"]),
        employee_type=row["employee_type"],
        gross_salary=as_float(row["gross_salary"]),
        basic_salary=as_float(row["basic_salary"]),
        payable_days=as_float(row["payable_days"]),
        allowances=_items(row.get("allowances")),
        deductions=_items(row.get("deductions")),
        payment_month=row["payment_month"],
        payment_year=str(row["payment_year"]),
        employee=employee_ref_from_row(row),
        created_at=row.get("created_at"),
    )


def _draft_params(draft: SalaryDraft) -> tuple:
    return (
        draft.employee_id,
        draft.employee_type,
        draft.gross_salary,
        draft.basic_salary,
        draft.payable_days,
        _items_json(draft.allowances),
        _items_json(draft.deductions),
        draft.payment_month,
        draft.payment_year,
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY s.payment_year DESC, s.salary_id DESC")
            return [_to_salary(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE s.employee_id=%s ORDER BY s.payment_year DESC, s.salary_id DESC",
                (int(employee_id),),
            )
            return [_to_salary(r) for r in fetchall(cur)]

    def get_by_id(self, salary_id: int) -> Optional[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE s.salary_id=%s", (int(salary_id),))
            row = fetchone(cur)
            return _to_salary(row) if row else None

    def find_for_period(self, *, employee_id: int, payment_month: str, payment_year: str) -> Optional[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE s.employee_id=%s AND s.payment_month=%s AND s.payment_year=%s",
                (int(employee_id), payment_month, payment_year),
            )
            row = fetchone(cur)
            return _to_salary(row) if row else None

    def create(self, draft: SalaryDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salaries(
                    employee_id, employee_type, gross_salary, basic_salary, payable_days,
                    allowances, deductions, payment_month, payment_year
                ) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _draft_params(draft),
            )
            return int(cur.lastrowid)

    def update(self, salary_id: int, draft: SalaryDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salaries
                SET employee_id=%s, employee_type=%s, gross_salary=%s, basic_salary=%s,
                    payable_days=%s, allowances=%s, deductions=%s, payment_month=%s, payment_year=%s
                WHERE salary_id=%s
                """,
                (*_draft_params(draft), int(salary_id)),
            )
            return cur.rowcount >= 0

    def delete_by_id(self, salary_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salaries WHERE salary_id=%s", (int(salary_id),))
            return cur.rowcount > 0
