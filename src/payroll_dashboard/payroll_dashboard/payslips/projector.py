from __future__ import annotations

import logging
import re
from datetime import date
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from ..attendance.leave import LeaveBalance
from ..common.datetime_utils import long_date
from ..common.formatting import fmt_dec, fmt_quantity, position_label
from ..core.constants import DEFAULT_LEAVE_ENTITLEMENTS, SYSTEM_COMMENTS
from ..payroll.model import PayrollPeriod, PayrollRow
from ..payroll.rules import PayrollRules
from .model import PayslipBatch, PayslipDocument, PayslipError, PayslipLine, PayslipSection

logger = logging.getLogger(__name__)


def _percent(rate: Decimal) -> str:
    return f"{(rate * 100).normalize():f}%"


def _slug(value: str) -> str:
    return re.sub(r"\s+", "_", value.strip())


def payslip_filename(employee_name: str, period_name: str) -> str:
    return f"Payslip_{_slug(employee_name)}_{_slug(period_name)}.pdf"


def batch_filename(period_name: str) -> str:
    return f"All_Payslips_{_slug(period_name or 'Payroll')}.pdf"


class PayslipProjector:
    """Maps payroll records onto payslip layouts.

    Pure formatting: no amounts are recomputed here apart from the section
    subtotals, which are sums of the record's own fields.
    """

    def __init__(
        self,
        *,
        company_name: str,
        rules: PayrollRules,
        leave_entitlements: Mapping[str, int] = DEFAULT_LEAVE_ENTITLEMENTS,
    ):
        self._company_name = company_name
        self._rules = rules
        self._leave_entitlements = leave_entitlements

    def _footer(self) -> tuple[str, ...]:
        e = self._leave_entitlements
        return (
            "This is a computer-generated payslip and does not require a signature.",
            f"{self._company_name} Zambia  •  NAPSA {_percent(self._rules.napsa_rate)}  •  "
            f"NHIMA {_percent(self._rules.nhima_rate)}  •  PAYE {self._rules.tax_year} Brackets  •  "
            f"Leave: {e['annual_days_per_month']} days/month annual, {e['sick_days']} sick, "
            f"{e['compassionate_days']} compassionate",
        )

    def project(
        self,
        row: PayrollRow,
        period: PayrollPeriod,
        *,
        generated_at: date,
        leave: Optional[LeaveBalance] = None,
    ) -> PayslipDocument:
        r = row.record

        earnings = [PayslipLine("Basic Salary", fmt_dec(r.basic_salary))]
        if r.extra_shift_total > 0:
            earnings.append(PayslipLine(f"Extra Shifts ({fmt_quantity(r.extra_shifts_count)})", fmt_dec(r.extra_shift_total)))
        if r.bonus > 0:
            earnings.append(PayslipLine("Bonus", fmt_dec(r.bonus)))
        earnings.append(PayslipLine("GROSS SALARY", fmt_dec(r.gross_salary), is_total=True))

        statutory = [
            PayslipLine(f"NAPSA ({_percent(self._rules.napsa_rate)})", fmt_dec(r.napsa_employee)),
            PayslipLine(f"NHIMA ({_percent(self._rules.nhima_rate)})", fmt_dec(r.nhima_employee)),
        ]
        if r.paye_tax > 0:
            statutory.append(PayslipLine("PAYE Tax", fmt_dec(r.paye_tax)))
        statutory.append(PayslipLine("TOTAL STATUTORY", fmt_dec(r.total_statutory), is_total=True))

        sections = [
            PayslipSection("earnings", "EARNINGS", tuple(earnings)),
            PayslipSection("statutory", "STATUTORY DEDUCTIONS", tuple(statutory)),
        ]

        if r.total_other_deductions > 0:
            other = []
            if r.absence_deduction > 0:
                other.append(PayslipLine(f"Absence ({r.absent_days} days)", fmt_dec(r.absence_deduction)))
            if r.shortage_amount > 0:
                other.append(PayslipLine("Cash Shortage", fmt_dec(r.shortage_amount)))
            if r.advances > 0:
                other.append(PayslipLine("Salary Advance", fmt_dec(r.advances)))
            if r.fines > 0:
                other.append(PayslipLine("Fines / Penalties", fmt_dec(r.fines)))
            if r.other_deductions > 0:
                other.append(PayslipLine("Other Deductions", fmt_dec(r.other_deductions)))
            other.append(PayslipLine("TOTAL OTHER DEDUCTIONS", fmt_dec(r.total_other_deductions), is_total=True))
            sections.append(PayslipSection("other", "OTHER DEDUCTIONS", tuple(other)))

        comment = r.comments if r.comments and r.comments not in SYSTEM_COMMENTS else None

        return PayslipDocument(
            employee_id=r.employee_id,
            employee_code=r.employee_id[:8].upper(),
            employee_name=row.full_name,
            position=position_label(row.position),
            branch_name=row.branch_name,
            company_name=self._company_name,
            period_name=period.period_name,
            period_range=f"{period.start_date.isoformat()}  to  {period.end_date.isoformat()}",
            sections=tuple(sections),
            gross_salary=fmt_dec(r.gross_salary),
            net_salary_due=fmt_dec(r.net_salary_due),
            footer_lines=self._footer(),
            generated_on=long_date(generated_at),
            filename=payslip_filename(row.full_name, period.period_name),
            comment=comment,
            leave=leave,
            needs_review=r.needs_review,
        )

    def project_batch(
        self,
        rows: Sequence[PayrollRow],
        period: PayrollPeriod,
        *,
        generated_at: date,
        leave_by_employee: Optional[Mapping[str, LeaveBalance]] = None,
    ) -> PayslipBatch:
        """One page per row; a row that fails is reported, the rest still render."""

        leave_by_employee = leave_by_employee or {}
        pages: list[PayslipDocument] = []
        errors: list[PayslipError] = []

        for row in rows:
            try:
                pages.append(
                    self.project(
                        row,
                        period,
                        generated_at=generated_at,
                        leave=leave_by_employee.get(row.record.employee_id),
                    )
                )
            except Exception as e:
                logger.exception("Payslip for employee %s failed", row.record.employee_id)
                errors.append(PayslipError(employee_id=row.record.employee_id, message=str(e) or type(e).__name__))

        return PayslipBatch(filename=batch_filename(period.period_name), pages=tuple(pages), errors=tuple(errors))
