from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import Gender, MaritalStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_update, db_cursor, fetchall, fetchone, from_json, to_json
from .model import OPTIONAL_PROFILE_FIELDS, Employee, LeaveBalance
from .repository import EmployeeRepository

# Columns writable through create/update (leave_balance has its own statement).
WRITABLE_COLUMNS = (
    "emp_no",
    "name",
    "email",
    "dob",
    "gender",
    "marital_status",
    "designation",
    "department_id",
    "qualification",
    "contact_no",
    "aadhar_no",
    "pan",
    "role",
    "doj",
    "dol",
) + OPTIONAL_PROFILE_FIELDS

_SELECT = f"""
    SELECT emp.employee_id, emp.user_id, emp.leave_balance, emp.created_at,
           {", ".join("emp." + c for c in WRITABLE_COLUMNS)},
           d.department_name
    FROM employees emp
    LEFT JOIN departments d ON d.department_id = emp.department_id
"""


def _to_employee(row: Mapping[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        user_id=int(row["user_id"]),
        emp_no=int(row["emp_no"]),
        name=row["name"],
        email=row["email"],
        dob=row["dob"],
        gender=Gender(row["gender"]),
        marital_status=MaritalStatus(row["marital_status"]),
        designation=row["designation"],
        department_id=int(row["department_id"]),
        qualification=row["qualification"],
        contact_no=row["contact_no"],
        aadhar_no=row["aadhar_no"],
        pan=row["pan"],
        role=Role(row["role"]),
        doj=row["doj"],
        dol=row.get("dol"),
        leave_balance=LeaveBalance.from_mapping(from_json(row.get("leave_balance"), {})),
        department_name=row.get("department_name"),
        created_at=row.get("created_at"),
        **{name: row.get(name) for name in OPTIONAL_PROFILE_FIELDS},
    )


def _column_value(value: Any) -> Any:
    # Enums are stored by value.
    return getattr(value, "value", value)


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _fetch_one(self, where: str, params: tuple) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {where}", params)
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._fetch_one("emp.employee_id=%s", (int(employee_id),))

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        return self._fetch_one("emp.user_id=%s", (int(user_id),))

    def get_by_emp_no(self, emp_no: int) -> Optional[Employee]:
        return self._fetch_one("emp.emp_no=%s", (int(emp_no),))

    def get_many(self, employee_ids: Sequence[int]) -> Sequence[Employee]:
        ids = [int(i) for i in employee_ids]
        if not ids:
            return []
        placeholders = ", ".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE emp.employee_id IN ({placeholders})", tuple(ids))
            return [_to_employee(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY emp.emp_no")
            return [_to_employee(r) for r in fetchall(cur)]

    def create(self, *, user_id: int, fields: Mapping[str, Any], leave_balance: LeaveBalance) -> int:
        unknown = set(fields) - set(WRITABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown columns for employees: {sorted(unknown)}")

        columns = ["user_id", *fields.keys(), "leave_balance"]
        values = [int(user_id), *(_column_value(v) for v in fields.values()), to_json(leave_balance.to_dict())]
        placeholders = ", ".join(["%s"] * len(columns))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"INSERT INTO employees({', '.join(columns)}) VALUES({placeholders})", tuple(values))
            return int(cur.lastrowid)

    def update(self, employee_id: int, fields: Mapping[str, Any]) -> bool:
        if not fields:
            return True
        values = {k: _column_value(v) for k, v in fields.items()}
        sql, params = build_update("employees", "employee_id", employee_id, values, allowed=WRITABLE_COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return cur.rowcount >= 0

    def update_leave_balance(self, employee_id: int, balance: LeaveBalance) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET leave_balance=%s WHERE employee_id=%s",
                (to_json(balance.to_dict()), int(employee_id)),
            )
            return cur.rowcount >= 0

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
