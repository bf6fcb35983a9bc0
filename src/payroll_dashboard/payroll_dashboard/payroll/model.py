from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.numbers import ZERO


@dataclass(frozen=True)
class PayrollPeriod:
    period_id: str
    period_name: str
    start_date: date
    end_date: date
    is_finalized: bool = False


@dataclass(frozen=True)
class PayrollAdjustment:
    """Per-employee inputs that do not come from daily logs."""

    bonus: Decimal = ZERO
    other_deductions: Decimal = ZERO


@dataclass(frozen=True)
class PayrollRecord:
    """Output of record for one (employee, period).

    gross_salary = basic_salary + extra_shift_total + bonus, and
    net_salary_due = gross_salary - total_deductions, floored at zero;
    ``needs_review`` marks records where the floor was applied.
    """

    employee_id: str
    branch_id: str
    period_id: str
    basic_salary: Decimal
    gross_salary: Decimal
    net_salary_due: Decimal
    napsa_employee: Decimal = ZERO
    nhima_employee: Decimal = ZERO
    paye_tax: Decimal = ZERO
    extra_shifts_count: Decimal = ZERO
    extra_shift_total: Decimal = ZERO
    bonus: Decimal = ZERO
    shortage_amount: Decimal = ZERO
    advances: Decimal = ZERO
    fines: Decimal = ZERO
    absent_days: int = 0
    absence_deduction: Decimal = ZERO
    other_deductions: Decimal = ZERO
    comments: Optional[str] = None
    needs_review: bool = False

    @property
    def total_statutory(self) -> Decimal:
        return self.napsa_employee + self.nhima_employee + self.paye_tax

    @property
    def total_other_deductions(self) -> Decimal:
        return (
            self.shortage_amount
            + self.advances
            + self.fines
            + self.absence_deduction
            + self.other_deductions
        )

    @property
    def total_deductions(self) -> Decimal:
        return self.total_statutory + self.total_other_deductions


@dataclass(frozen=True)
class PayrollRow:
    """Read-model for dashboard tables: a record plus display names."""

    record: PayrollRecord
    full_name: str
    position: str
    branch_name: str

    def as_dict(self) -> dict:
        r = self.record
        return {
            "employee_id": r.employee_id,
            "full_name": self.full_name,
            "position": self.position,
            "branch_id": r.branch_id,
            "branch_name": self.branch_name,
            "basic_salary": r.basic_salary,
            "gross_salary": r.gross_salary,
            "net_salary_due": r.net_salary_due,
            "napsa_employee": r.napsa_employee,
            "nhima_employee": r.nhima_employee,
            "paye_tax": r.paye_tax,
            "extra_shifts_count": r.extra_shifts_count,
            "extra_shift_total": r.extra_shift_total,
            "bonus": r.bonus,
            "shortage_amount": r.shortage_amount,
            "advances": r.advances,
            "fines": r.fines,
            "absent_days": r.absent_days,
            "absence_deduction": r.absence_deduction,
            "other_deductions": r.other_deductions,
            "comments": r.comments,
            "needs_review": r.needs_review,
        }
