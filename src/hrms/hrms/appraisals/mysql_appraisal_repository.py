from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, from_json, to_json
from ..employees.mysql_refs import EMPLOYEE_REF_COLUMNS, employee_ref_from_row, employee_ref_join
from .model import Appraisal, AppraisalDraft
from .repository import AppraisalRepository

_SELECT = f"""
    SELECT a.appraisal_id, a.employee_id, a.department_id, a.accomplishments, a.supervisors,
           a.supervisor_comments, a.ratings, a.total_rating, a.created_at, {EMPLOYEE_REF_COLUMNS}
    FROM appraisals a
    {employee_ref_join("a")}
"""


def _to_appraisal(row: Mapping[str, Any]) -> Appraisal:
    return Appraisal(
        appraisal_id=int(row["appraisal_id"]),
        employee_id=int(row["employee_id"]),
        department_id=int(row["department_id"]),
        accomplishments=row.get("accomplishments"),
        supervisors=tuple(int(i) for i in from_json(row.get("supervisors"), [])),
        supervisor_comments=row.get("supervisor_comments"),
        ratings={k: as_float(v) for k, v in from_json(row.get("ratings"), {}).items()},
        total_rating=as_float(row.get("total_rating")),
        employee=employee_ref_from_row(row),
        created_at=row.get("created_at"),
    )


def _draft_params(draft: AppraisalDraft) -> tuple:
    return (
        draft.employee_id,
        draft.department_id,
        draft.accomplishments,
        to_json(list(draft.supervisors)),
        draft.supervisor_comments,
        to_json(draft.ratings),
        draft.total_rating,
    )


class MySQLAppraisalRepository(AppraisalRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Appraisal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY a.created_at DESC, a.appraisal_id DESC")
            return [_to_appraisal(r) for r in fetchall(cur)]

    def get_by_id(self, appraisal_id: int) -> Optional[Appraisal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.appraisal_id=%s", (int(appraisal_id),))
            row = fetchone(cur)
            return _to_appraisal(row) if row else None

    def list_for_employee(self, employee_id: int) -> Sequence[Appraisal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.employee_id=%s ORDER BY a.created_at DESC", (int(employee_id),))
            return [_to_appraisal(r) for r in fetchall(cur)]

    def list_for_supervisor(self, supervisor_employee_id: int) -> Sequence[Appraisal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE JSON_CONTAINS(a.supervisors, CAST(%s AS JSON)) ORDER BY a.created_at DESC",
                (str(int(supervisor_employee_id)),),
            )
            return [_to_appraisal(r) for r in fetchall(cur)]

    def create(self, draft: AppraisalDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO appraisals(
                    employee_id, department_id, accomplishments, supervisors,
                    supervisor_comments, ratings, total_rating
                ) VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                _draft_params(draft),
            )
            return int(cur.lastrowid)

    def update(self, appraisal_id: int, draft: AppraisalDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE appraisals
                SET employee_id=%s, department_id=%s, accomplishments=%s, supervisors=%s,
                    supervisor_comments=%s, ratings=%s, total_rating=%s
                WHERE appraisal_id=%s
                """,
                (*_draft_params(draft), int(appraisal_id)),
            )
            return cur.rowcount >= 0

    def delete_by_id(self, appraisal_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM appraisals WHERE appraisal_id=%s", (int(appraisal_id),))
            return cur.rowcount > 0
