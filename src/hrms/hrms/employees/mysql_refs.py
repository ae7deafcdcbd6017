from __future__ import annotations

from typing import Any, Mapping

from ..common.refs import EmployeeRef

# Columns selected alongside a record that carries ``<alias>.employee_id``.
EMPLOYEE_REF_COLUMNS = """
    e.emp_no AS ref_emp_no, e.name AS ref_name, e.designation AS ref_designation,
    e.department_id AS ref_department_id, d.department_name AS ref_department_name,
    e.dol AS ref_dol
"""


def employee_ref_join(alias: str) -> str:
    return f"""
    LEFT JOIN employees e ON e.employee_id = {alias}.employee_id
    LEFT JOIN departments d ON d.department_id = e.department_id
    """


def employee_ref_from_row(row: Mapping[str, Any]) -> EmployeeRef:
    return EmployeeRef(
        employee_id=int(row["employee_id"]),
        emp_no=int(row["ref_emp_no"]) if row.get("ref_emp_no") is not None else None,
        name=row.get("ref_name"),
        designation=row.get("ref_designation"),
        department_id=row.get("ref_department_id"),
        department_name=row.get("ref_department_name"),
        dol=row.get("ref_dol"),
    )
