from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.numbers import to_amount
from ..core.constants import ID_BATCH_SIZE, UNKNOWN_NAME
from ..core.enums import EmploymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import chunked, db_cursor, fetchall, fetchone, in_clause
from .model import Branch, Employee, EmployeeContact
from .repository import BranchRepository, EmployeeRepository

_EMPLOYEE_COLUMNS = "id, full_name, position, branch_id, basic_salary, employment_status, date_started"


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=str(r["id"]),
        full_name=r["full_name"],
        position=r.get("position") or "",
        branch_id=str(r["branch_id"]),
        basic_pay=to_amount(r.get("basic_salary")),
        employment_status=EmploymentStatus(r.get("employment_status") or EmploymentStatus.ACTIVE.value),
        date_started=r.get("date_started"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_ids(self, employee_ids: Sequence[str]) -> Sequence[Employee]:
        ids = list(dict.fromkeys(employee_ids))
        out: list[Employee] = []
        if not ids:
            return out
        with db_cursor(self._conn_factory) as (_, cur):
            for batch in chunked(ids, ID_BATCH_SIZE):
                cur.execute(
                    f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE id IN ({in_clause(batch)})",
                    tuple(batch),
                )
                out.extend(_to_employee(r) for r in fetchall(cur))
        return out

    def list_active(self, *, branch_id: Optional[str] = None) -> Sequence[Employee]:
        clauses = ["employment_status=%s"]
        params: list[object] = [EmploymentStatus.ACTIVE.value]
        if branch_id is not None:
            clauses.append("branch_id=%s")
            params.append(branch_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EMPLOYEE_COLUMNS}
                FROM employees
                WHERE {" AND ".join(clauses)}
                ORDER BY full_name ASC
                """,
                tuple(params),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def list_contacts(self) -> Sequence[EmployeeContact]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    e.id, e.full_name, e.branch_id, b.name AS branch_name, e.position,
                    e.phone, e.email, e.mobile_money_number, e.home_address,
                    e.nrc_number, e.tpin, e.bank_name, e.bank_account_number,
                    e.social_security_number, e.emergency_contact_name,
                    e.emergency_contact_phone, e.date_started
                FROM employees e
                LEFT JOIN branches b ON b.id = e.branch_id
                WHERE e.employment_status=%s
                ORDER BY e.full_name ASC
                """,
                (EmploymentStatus.ACTIVE.value,),
            )
            return [
                EmployeeContact(
                    employee_id=str(r["id"]),
                    full_name=r["full_name"],
                    branch_id=str(r["branch_id"]),
                    branch_name=r.get("branch_name") or UNKNOWN_NAME,
                    position=r.get("position") or "",
                    phone=r.get("phone"),
                    email=r.get("email"),
                    mobile_money_number=r.get("mobile_money_number"),
                    home_address=r.get("home_address"),
                    nrc_number=r.get("nrc_number"),
                    tpin=r.get("tpin"),
                    bank_name=r.get("bank_name"),
                    bank_account_number=r.get("bank_account_number"),
                    social_security_number=r.get("social_security_number"),
                    emergency_contact_name=r.get("emergency_contact_name"),
                    emergency_contact_phone=r.get("emergency_contact_phone"),
                    date_started=r.get("date_started"),
                )
                for r in fetchall(cur)
            ]


class MySQLBranchRepository(BranchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, branch_id: str) -> Optional[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, is_active FROM branches WHERE id=%s", (branch_id,))
            r = fetchone(cur)
            if not r:
                return None
            return Branch(branch_id=str(r["id"]), name=r["name"], is_active=bool(r["is_active"]))

    def get_by_ids(self, branch_ids: Sequence[str]) -> Sequence[Branch]:
        ids = list(dict.fromkeys(branch_ids))
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT id, name, is_active FROM branches WHERE id IN ({in_clause(ids)})",
                tuple(ids),
            )
            return [
                Branch(branch_id=str(r["id"]), name=r["name"], is_active=bool(r["is_active"]))
                for r in fetchall(cur)
            ]

    def list_active(self) -> Sequence[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, is_active FROM branches WHERE is_active=1 ORDER BY name ASC")
            return [
                Branch(branch_id=str(r["id"]), name=r["name"], is_active=bool(r["is_active"]))
                for r in fetchall(cur)
            ]
