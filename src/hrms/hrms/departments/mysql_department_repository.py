from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Department
from .repository import DepartmentRepository

_COLUMNS = "department_id, department_code, department_name, description, created_at"


def _to_department(row: Mapping[str, Any]) -> Department:
    return Department(
        department_id=int(row["department_id"]),
        department_code=row["department_code"],
        department_name=row["department_name"],
        description=row.get("description"),
        created_at=row.get("created_at"),
    )


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM departments ORDER BY department_name")
            return [_to_department(r) for r in fetchall(cur)]

    def get_by_id(self, department_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM departments WHERE department_id=%s", (int(department_id),))
            row = fetchone(cur)
            return _to_department(row) if row else None

    def get_by_code(self, department_code: str) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM departments WHERE department_code=%s", (department_code,))
            row = fetchone(cur)
            return _to_department(row) if row else None

    def create(self, *, department_code: str, department_name: str, description: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO departments(department_code, department_name, description) VALUES(%s,%s,%s)",
                (department_code, department_name, description),
            )
            return int(cur.lastrowid)

    def update(
        self,
        department_id: int,
        *,
        department_code: str,
        department_name: str,
        description: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE departments
                SET department_code=%s, department_name=%s, description=%s
                WHERE department_id=%s
                """,
                (department_code, department_name, description, int(department_id)),
            )
            return cur.rowcount >= 0

    def delete_by_id(self, department_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE department_id=%s", (int(department_id),))
            return cur.rowcount > 0
