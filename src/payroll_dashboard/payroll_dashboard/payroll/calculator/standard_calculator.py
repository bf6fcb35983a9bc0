from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence

from ...attendance.model import DailyAggregate
from ...common.numbers import ZERO, money
from ...core.constants import COMMENT_FROM_LOGS, COMMENT_NO_LOGS
from ...employees.model import Employee
from ..model import PayrollAdjustment, PayrollRecord
from ..rules import PayeBand, PayrollRules
from .base import PayrollCalculator

logger = logging.getLogger(__name__)


def progressive_tax(income: Decimal, bands: Sequence[PayeBand]) -> Decimal:
    """Tax ``income`` slice by slice through the band table."""

    tax = ZERO
    lower = ZERO
    for band in bands:
        if income <= lower:
            break
        top = income if band.upper is None else min(income, band.upper)
        tax += (top - lower) * band.rate
        if band.upper is None:
            break
        lower = band.upper
    return money(tax)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule set.

    - extra shifts and absences are paid/charged at flat configured rates
    - NAPSA on gross capped at the ceiling, NHIMA on gross, PAYE by bands
    - net pay never goes below zero; a record that hit the floor is flagged
    """

    def compute(
        self,
        employee: Employee,
        aggregate: Optional[DailyAggregate],
        *,
        period_id: str,
        rules: PayrollRules,
        adjustment: Optional[PayrollAdjustment] = None,
    ) -> PayrollRecord:
        adjustment = adjustment or PayrollAdjustment()
        basic = money(employee.basic_pay)
        bonus = money(adjustment.bonus)
        other = money(adjustment.other_deductions)

        if aggregate is None:
            extra_shifts = ZERO
            absent_days = 0
            shortages = advances = fines = ZERO
            branch_id = employee.branch_id
            comments = COMMENT_NO_LOGS
        else:
            extra_shifts = aggregate.total_extra_shifts
            absent_days = aggregate.days_absent
            shortages = money(aggregate.total_shortages)
            advances = money(aggregate.total_advances)
            fines = money(aggregate.total_fines)
            # The record belongs to the branch the employee is on now.
            branch_id = employee.branch_id or aggregate.branch_id
            comments = COMMENT_FROM_LOGS

        extra_shift_total = money(extra_shifts * rules.extra_shift_rate)
        absence_deduction = money(absent_days * rules.absence_daily_rate)
        gross = basic + extra_shift_total + bonus

        napsa = money(min(gross, rules.napsa_ceiling) * rules.napsa_rate)
        nhima = money(gross * rules.nhima_rate)
        paye = progressive_tax(gross, rules.paye_bands)

        net = gross - (napsa + nhima + paye + shortages + advances + fines + absence_deduction + other)
        needs_review = False
        if net < 0:
            logger.warning(
                "Net pay for employee %s in period %s is %s; clamped to 0 and flagged for review",
                employee.employee_id,
                period_id,
                net,
            )
            comments = f"{comments}; deductions exceed gross by {-net:.2f}, review required"
            net = ZERO
            needs_review = True

        return PayrollRecord(
            employee_id=employee.employee_id,
            branch_id=branch_id,
            period_id=period_id,
            basic_salary=basic,
            gross_salary=gross,
            net_salary_due=net,
            napsa_employee=napsa,
            nhima_employee=nhima,
            paye_tax=paye,
            extra_shifts_count=extra_shifts,
            extra_shift_total=extra_shift_total,
            bonus=bonus,
            shortage_amount=shortages,
            advances=advances,
            fines=fines,
            absent_days=absent_days,
            absence_deduction=absence_deduction,
            other_deductions=other,
            comments=comments,
            needs_review=needs_review,
        )
