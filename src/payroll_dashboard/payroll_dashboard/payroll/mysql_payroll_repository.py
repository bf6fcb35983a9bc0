from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from ..common.numbers import to_amount
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PayrollPeriod, PayrollRecord
from .repository import PayrollRepository

_RECORD_FIELDS = (
    "employee_id",
    "branch_id",
    "basic_salary",
    "gross_salary",
    "net_salary_due",
    "napsa_employee",
    "nhima_employee",
    "paye_tax",
    "extra_shifts_count",
    "extra_shift_total",
    "bonus",
    "shortage_amount",
    "advances",
    "fines",
    "absent_days",
    "absence_deduction",
    "other_deductions",
    "comments",
    "needs_review",
)


def _to_period(r: Dict[str, Any]) -> PayrollPeriod:
    return PayrollPeriod(
        period_id=str(r["id"]),
        period_name=r["period_name"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        is_finalized=bool(r["is_finalized"]),
    )


def _to_record(r: Dict[str, Any]) -> PayrollRecord:
    return PayrollRecord(
        employee_id=str(r["employee_id"]),
        branch_id=str(r["branch_id"]),
        period_id=str(r["payroll_period_id"]),
        basic_salary=to_amount(r.get("basic_salary")),
        gross_salary=to_amount(r.get("gross_salary")),
        net_salary_due=to_amount(r.get("net_salary_due")),
        napsa_employee=to_amount(r.get("napsa_employee")),
        nhima_employee=to_amount(r.get("nhima_employee")),
        paye_tax=to_amount(r.get("paye_tax")),
        extra_shifts_count=to_amount(r.get("extra_shifts_count")),
        extra_shift_total=to_amount(r.get("extra_shift_total")),
        bonus=to_amount(r.get("bonus")),
        shortage_amount=to_amount(r.get("shortage_amount")),
        advances=to_amount(r.get("advances")),
        fines=to_amount(r.get("fines")),
        absent_days=int(r.get("absent_days") or 0),
        absence_deduction=to_amount(r.get("absence_deduction")),
        other_deductions=to_amount(r.get("other_deductions")),
        comments=r.get("comments"),
        needs_review=bool(r.get("needs_review")),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_periods(self) -> Sequence[PayrollPeriod]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, period_name, start_date, end_date, is_finalized
                FROM payroll_periods
                ORDER BY start_date DESC
                """
            )
            return [_to_period(r) for r in fetchall(cur)]

    def get_period(self, period_id: str) -> Optional[PayrollPeriod]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, period_name, start_date, end_date, is_finalized FROM payroll_periods WHERE id=%s",
                (period_id,),
            )
            r = fetchone(cur)
            return _to_period(r) if r else None

    def get_period_by_name(self, period_name: str) -> Optional[PayrollPeriod]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, period_name, start_date, end_date, is_finalized
                FROM payroll_periods
                WHERE period_name=%s
                LIMIT 1
                """,
                (period_name,),
            )
            r = fetchone(cur)
            return _to_period(r) if r else None

    def get_records(self, period_id: str) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT payroll_period_id, {", ".join(_RECORD_FIELDS)}
                FROM payroll_records
                WHERE payroll_period_id=%s
                """,
                (period_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def replace_records(self, period_id: str, records: Sequence[PayrollRecord]) -> int:
        # Delete + insert run in one transaction (db_cursor commits once).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payroll_records WHERE payroll_period_id=%s", (period_id,))
            if not records:
                return 0
            placeholders = ",".join(["%s"] * (len(_RECORD_FIELDS) + 2))
            cur.executemany(
                f"""
                INSERT INTO payroll_records(id, payroll_period_id, {", ".join(_RECORD_FIELDS)})
                VALUES({placeholders})
                """,
                [
                    (str(uuid.uuid4()), period_id, *(getattr(r, f) for f in _RECORD_FIELDS))
                    for r in records
                ],
            )
            return len(records)
