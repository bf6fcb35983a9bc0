from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Iterable, Mapping, Optional, Sequence

from ..attendance.aggregator import aggregate, employees_without_logs
from ..attendance.leave import LeaveBalance, leave_balance
from ..attendance.model import AttendanceLog, DailyAggregate
from ..attendance.repository import AttendanceLogRepository
from ..common.datetime_utils import months_in_year_until, now_local
from ..common.numbers import ZERO, to_amount
from ..common.validators import require_non_negative
from ..core.constants import DEFAULT_LEAVE_ENTITLEMENTS, DEFAULT_PERIOD_NAME, UNKNOWN_NAME, UNKNOWN_POSITION
from ..core.exceptions import NotFoundError, PeriodFinalizedError, ValidationError
from ..employees.model import Employee
from ..employees.repository import BranchRepository, EmployeeRepository
from ..payslips.model import PayslipBatch, PayslipDocument
from ..payslips.projector import PayslipProjector
from ..users.model import UserSession
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollAdjustment, PayrollPeriod, PayrollRecord, PayrollRow
from .repository import PayrollRepository
from .rules import PayrollRules
from .summary import BranchSummary, BranchTotals, summarize, totals

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreviewRow:
    aggregate: DailyAggregate
    branch_id: str
    full_name: str
    position: str
    branch_name: str

    def as_dict(self) -> dict:
        a = self.aggregate
        return {
            "employee_id": a.employee_id,
            "branch_id": self.branch_id,
            "full_name": self.full_name,
            "position": self.position,
            "branch_name": self.branch_name,
            "days_present": a.days_present,
            "days_late": a.days_late,
            "days_absent": a.days_absent,
            "days_leave": a.days_leave,
            "days_off": a.days_off,
            "days_extra_shift": a.days_extra_shift,
            "total_extra_shifts": a.total_extra_shifts,
            "total_shortages": a.total_shortages,
            "total_advances": a.total_advances,
            "total_fines": a.total_fines,
            "total_days_logged": a.total_days_logged,
        }


@dataclass(frozen=True)
class PayrollPreview:
    period: PayrollPeriod
    rows: list[PreviewRow]
    no_logs_count: int
    totals: dict

    @property
    def employees_to_pay(self) -> int:
        return len(self.rows) + self.no_logs_count


@dataclass(frozen=True)
class PayrollRunResult:
    period: PayrollPeriod
    rows: list[PayrollRow]
    totals: dict

    @property
    def needs_review(self) -> list[PayrollRow]:
        return [r for r in self.rows if r.record.needs_review]


def _preview_totals(rows: Sequence[PreviewRow]) -> dict:
    out = {
        "logged": len(rows),
        "absent": 0,
        "shortages": ZERO,
        "advances": ZERO,
        "fines": ZERO,
        "extra_shifts": ZERO,
    }
    for row in rows:
        a = row.aggregate
        out["absent"] += a.days_absent
        out["shortages"] += a.total_shortages
        out["advances"] += a.total_advances
        out["fines"] += a.total_fines
        out["extra_shifts"] += a.total_extra_shifts
    return out


def _result_totals(rows: Sequence[PayrollRow]) -> dict:
    out = {
        "count": len(rows),
        "gross": ZERO,
        "net": ZERO,
        "shortages": ZERO,
        "advances": ZERO,
        "fines": ZERO,
    }
    for row in rows:
        r = row.record
        out["gross"] += r.gross_salary
        out["net"] += r.net_salary_due
        out["shortages"] += r.shortage_amount
        out["advances"] += r.advances
        out["fines"] += r.fines
    return out


class PayrollService:
    """Payroll runs: preview a period's logs, generate records, read them back."""

    def __init__(
        self,
        payroll: PayrollRepository,
        logs: AttendanceLogRepository,
        employees: EmployeeRepository,
        branches: BranchRepository,
        *,
        rules: PayrollRules,
        projector: PayslipProjector,
        calculator: Optional[PayrollCalculator] = None,
        leave_entitlements: Mapping[str, int] = DEFAULT_LEAVE_ENTITLEMENTS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._payroll = payroll
        self._logs = logs
        self._employees = employees
        self._branches = branches
        self._rules = rules
        self._projector = projector
        self._calculator = calculator or StandardPayrollCalculator()
        self._leave_entitlements = leave_entitlements
        self._clock = clock

    def list_periods(self) -> Sequence[PayrollPeriod]:
        return self._payroll.list_periods()

    def get_period(self, period_id: str) -> PayrollPeriod:
        period = self._payroll.get_period(period_id)
        if not period:
            raise NotFoundError("Payroll period not found")
        return period

    def _branch_names(self, branch_ids: Iterable[str]) -> dict[str, str]:
        return {b.branch_id: b.name for b in self._branches.get_by_ids(list(set(branch_ids)))}

    def _aggregate_period(self, period: PayrollPeriod) -> tuple[list[Employee], dict[str, DailyAggregate]]:
        roster = list(self._employees.list_active())
        logs = self._logs.get_logs_between(start_date=period.start_date, end_date=period.end_date)
        return roster, aggregate(logs, {e.employee_id for e in roster})

    def preview(self, period_id: str) -> PayrollPreview:
        period = self.get_period(period_id)
        roster, aggregates = self._aggregate_period(period)

        by_id = {e.employee_id: e for e in roster}
        # Same branch the generated record will carry.
        branch_of = {a.employee_id: by_id[a.employee_id].branch_id or a.branch_id for a in aggregates.values()}
        branch_names = self._branch_names(branch_of.values())

        rows = [
            PreviewRow(
                aggregate=a,
                branch_id=branch_of[a.employee_id],
                full_name=by_id[a.employee_id].full_name,
                position=by_id[a.employee_id].position or UNKNOWN_POSITION,
                branch_name=branch_names.get(branch_of[a.employee_id], UNKNOWN_NAME),
            )
            for a in aggregates.values()
        ]
        rows.sort(key=lambda r: (r.branch_name, r.full_name))

        no_logs = employees_without_logs(aggregates, set(by_id))
        return PayrollPreview(period=period, rows=rows, no_logs_count=len(no_logs), totals=_preview_totals(rows))

    def generate(
        self,
        period_id: str,
        *,
        confirm_rules: bool = False,
        adjustments: Optional[Mapping[str, PayrollAdjustment]] = None,
    ) -> PayrollRunResult:
        """Compute and store one record per active employee for the period.

        Employees without logs get a clean payroll (basic pay, statutory
        deductions only). Records are independent of one another.
        """

        period = self.get_period(period_id)
        if period.is_finalized:
            raise PeriodFinalizedError(f"Period '{period.period_name}' is finalized")
        self._rules.check_period(period, confirmed=confirm_rules)

        adjustments = adjustments or {}
        roster, aggregates = self._aggregate_period(period)
        records = [
            self._calculator.compute(
                e,
                aggregates.get(e.employee_id),
                period_id=period.period_id,
                rules=self._rules,
                adjustment=adjustments.get(e.employee_id),
            )
            for e in roster
        ]

        saved = self._payroll.replace_records(period.period_id, records)
        rows = self._to_rows(records)
        result = PayrollRunResult(period=period, rows=rows, totals=_result_totals(rows))
        logger.info(
            "Generated payroll period=%s records=%d clean=%d flagged=%d",
            period.period_name,
            saved,
            len(employees_without_logs(aggregates, {e.employee_id for e in roster})),
            len(result.needs_review),
        )
        return result

    def _to_rows(self, records: Sequence[PayrollRecord]) -> list[PayrollRow]:
        employees = {e.employee_id: e for e in self._employees.get_by_ids([r.employee_id for r in records])}
        branch_names = self._branch_names(r.branch_id for r in records)

        rows = []
        for r in records:
            e = employees.get(r.employee_id)
            rows.append(
                PayrollRow(
                    record=r,
                    full_name=e.full_name if e else UNKNOWN_NAME,
                    position=(e.position if e else "") or UNKNOWN_POSITION,
                    branch_name=branch_names.get(r.branch_id, UNKNOWN_NAME),
                )
            )
        rows.sort(key=lambda row: (row.branch_name, row.full_name))
        return rows

    def rows_for_period(self, period_id: str) -> list[PayrollRow]:
        return self._to_rows(self._payroll.get_records(period_id))

    def payroll_rows(
        self,
        period_name: str = DEFAULT_PERIOD_NAME,
        *,
        visible_to: Optional[UserSession] = None,
    ) -> list[PayrollRow]:
        """Dashboard rows for a period by name; empty when it does not exist.

        With ``visible_to`` only rows of branches that user may see are kept.
        """

        period = self._payroll.get_period_by_name(period_name)
        if not period:
            return []
        rows = self.rows_for_period(period.period_id)
        if visible_to is not None:
            rows = [row for row in rows if visible_to.can_access_branch(row.record.branch_id)]
        return rows

    def branch_summary(
        self,
        period_name: str = DEFAULT_PERIOD_NAME,
        *,
        visible_to: Optional[UserSession] = None,
    ) -> tuple[list[BranchSummary], BranchTotals]:
        rows = self.payroll_rows(period_name, visible_to=visible_to)
        names = {row.record.branch_id: row.branch_name for row in rows}
        summaries = summarize((row.record for row in rows), names.get)
        return summaries, totals(summaries)

    def _leave_balances(self, period: PayrollPeriod, employee_ids: Sequence[str]) -> dict[str, LeaveBalance]:
        year_start = date(period.end_date.year, 1, 1)
        logs_by_employee: dict[str, list[AttendanceLog]] = {}
        only = employee_ids[0] if len(employee_ids) == 1 else None
        for log in self._logs.get_logs_between(start_date=year_start, end_date=period.end_date, employee_id=only):
            logs_by_employee.setdefault(log.employee_id, []).append(log)

        started = {e.employee_id: e.date_started for e in self._employees.get_by_ids(list(employee_ids))}
        return {
            employee_id: leave_balance(
                logs_by_employee.get(employee_id, []),
                months_accrued=months_in_year_until(started.get(employee_id), period.end_date),
                entitlements=self._leave_entitlements,
            )
            for employee_id in employee_ids
        }

    def payslip(self, period_id: str, employee_id: str) -> PayslipDocument:
        period = self.get_period(period_id)
        rows = [row for row in self.rows_for_period(period_id) if row.record.employee_id == employee_id]
        if not rows:
            raise NotFoundError("No payroll record for this employee in the period")

        leave = self._leave_balances(period, [employee_id])
        return self._projector.project(
            rows[0],
            period,
            generated_at=self._clock().date(),
            leave=leave.get(employee_id),
        )

    def payslips(self, period_id: str) -> PayslipBatch:
        period = self.get_period(period_id)
        rows = self.rows_for_period(period_id)
        leave = self._leave_balances(period, [row.record.employee_id for row in rows])
        batch = self._projector.project_batch(rows, period, generated_at=self._clock().date(), leave_by_employee=leave)
        if batch.errors:
            logger.warning("Payslip batch for %s: %d of %d failed", period.period_name, len(batch.errors), len(rows))
        return batch


def parse_adjustments(raw: Mapping[str, Mapping[str, object]]) -> dict[str, PayrollAdjustment]:
    """``{"<employee_id>": {"bonus": "100", "other_deductions": "0"}}`` from a request body."""

    adjustments = {}
    for employee_id, values in (raw or {}).items():
        if not isinstance(values, Mapping):
            raise ValidationError(f"Adjustment for {employee_id} must be an object")
        adjustments[str(employee_id)] = PayrollAdjustment(
            bonus=require_non_negative(to_amount(values.get("bonus")), "bonus"),
            other_deductions=require_non_negative(to_amount(values.get("other_deductions")), "other_deductions"),
        )
    return adjustments
