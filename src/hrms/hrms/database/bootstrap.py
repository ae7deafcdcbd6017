from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_LEAVE_BALANCE
from .connection import DatabaseConnection, DBConfig
from .mysql_base import to_json

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql_file(config: DBConfig, path: str | Path) -> int:
    sql = _strip_comments(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8")))
    conn = DatabaseConnection(config).connect()
    count = 0
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _exec_sql_file(DBConfig.from_dict(db_config), schema_path)
    logger.info("Applied %s schema statements from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _exec_sql_file(DBConfig.from_dict(db_config), seed_path)
    logger.info("Applied %s seed statements from %s", count, seed_path)


DEMO_ACCOUNTS = (
    # name, email, password, role, emp_no, department_code, designation
    ("Admin Demo", "admin@hrms.local", "admin123", "admin", 1001, "HR", "Administrator"),
    ("Hema HR", "hr@hrms.local", "hr12345", "hr", 1002, "HR", "HR Manager"),
    ("Arun Accounts", "accounts@hrms.local", "acc12345", "accounts", 1003, "ACC", "Accountant"),
    ("Lata Lead", "lead@hrms.local", "lead12345", "lead", 1004, "ENG", "Team Lead"),
    ("Esha Employee", "employee@hrms.local", "emp12345", "employee", 1005, "ENG", "Design Engineer"),
)


def ensure_demo_users(db_config: dict) -> None:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor(dictionary=True)

        def department_id(code: str) -> int:
            cur.execute("SELECT department_id FROM departments WHERE department_code=%s", (code,))
            row = cur.fetchone()
            if not row:
                raise RuntimeError(f"Missing departments row for department_code={code}")
            return int(row["department_id"])

        for name, email, password, role, emp_no, dept_code, designation in DEMO_ACCOUNTS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                user_id = int(existing["user_id"])
                cur.execute(
                    "UPDATE users SET name=%s, password_hash=%s, role=%s WHERE user_id=%s",
                    (name, password_hash, role, user_id),
                )
            else:
                cur.execute(
                    "INSERT INTO users (name, email, password_hash, role) VALUES (%s, %s, %s, %s)",
                    (name, email, password_hash, role),
                )
                user_id = int(cur.lastrowid)

            cur.execute("SELECT employee_id FROM employees WHERE user_id=%s", (user_id,))
            if cur.fetchone():
                continue
            cur.execute(
                """
                INSERT INTO employees (
                    user_id, emp_no, name, email, dob, gender, marital_status, designation,
                    department_id, qualification, contact_no, aadhar_no, pan, role, doj, leave_balance
                )
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user_id,
                    emp_no,
                    name,
                    email,
                    date(1990, 1, 1),
                    "Female",
                    "Single",
                    designation,
                    department_id(dept_code),
                    "B.E.",
                    "9000000000",
                    f"0000-0000-{emp_no}",
                    f"ABCDE{emp_no}F",
                    role,
                    date(2020, 4, 1),
                    to_json(DEFAULT_LEAVE_BALANCE),
                ),
            )

        conn.commit()
        logger.info("Demo accounts ready (%s)", len(DEMO_ACCOUNTS))
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
