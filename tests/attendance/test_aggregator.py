from __future__ import annotations

from datetime import date
from decimal import Decimal

from src.payroll_dashboard.payroll_dashboard.attendance.aggregator import aggregate, employees_without_logs
from src.payroll_dashboard.payroll_dashboard.attendance.model import AttendanceLog
from src.payroll_dashboard.payroll_dashboard.core.enums import AttendanceStatus


def _log(employee_id, day, status, **kwargs):
    return AttendanceLog(
        employee_id=employee_id,
        branch_id="b-lusaka",
        log_date=date(2026, 1, day),
        status=status,
        **kwargs,
    )


def test_every_log_increments_exactly_one_counter():
    statuses = list(AttendanceStatus)
    logs = [_log("e-1", i + 1, s) for i, s in enumerate(statuses)]

    agg = aggregate(logs, {"e-1"})["e-1"]

    assert agg.total_days_logged == len(statuses)
    assert agg.status_days_total == agg.total_days_logged
    assert (agg.days_present, agg.days_late, agg.days_absent) == (1, 1, 1)
    assert (agg.days_leave, agg.days_off, agg.days_extra_shift) == (1, 1, 1)


def test_amounts_and_extra_shifts_are_summed_on_any_status():
    logs = [
        _log("e-1", 1, AttendanceStatus.PRESENT, shortage_amount=Decimal("200.00"), extra_shifts_worked=Decimal("1")),
        _log("e-1", 2, AttendanceStatus.EXTRA_SHIFT, extra_shifts_worked=Decimal("2")),
        _log("e-1", 3, AttendanceStatus.LATE, advance_amount=Decimal("500.00"), fine_amount=Decimal("25.50")),
    ]

    agg = aggregate(logs, {"e-1"})["e-1"]

    assert agg.total_extra_shifts == Decimal("3")
    assert agg.total_shortages == Decimal("200.00")
    assert agg.total_advances == Decimal("500.00")
    assert agg.total_fines == Decimal("25.50")


def test_inactive_employees_are_ignored_and_missing_ones_reported():
    logs = [_log("e-1", 1, AttendanceStatus.PRESENT), _log("e-9", 1, AttendanceStatus.ABSENT)]
    active = {"e-1", "e-2"}

    result = aggregate(logs, active)

    assert set(result) == {"e-1"}
    assert employees_without_logs(result, active) == {"e-2"}


def test_malformed_shortage_counts_as_zero():
    rows = [
        {"employee_id": "e-1", "branch_id": "b", "log_date": date(2026, 1, 5), "attendance_status": "present", "shortage_amount": "100"},
        {"employee_id": "e-2", "branch_id": "b", "log_date": date(2026, 1, 5), "attendance_status": "present", "shortage_amount": "12abc"},
        {"employee_id": "e-3", "branch_id": "b", "log_date": date(2026, 1, 5), "attendance_status": "late", "shortage_amount": None},
    ]
    logs = [AttendanceLog.from_mapping(r) for r in rows]

    result = aggregate(logs, {"e-1", "e-2", "e-3"})

    assert len(result) == 3
    assert result["e-1"].total_shortages == Decimal("100.00")
    assert result["e-2"].total_shortages == Decimal("0.00")
    assert result["e-3"].days_late == 1


def test_leave_type_is_dropped_for_non_leave_rows():
    log = AttendanceLog.from_mapping(
        {"employee_id": "e-1", "branch_id": "b", "log_date": date(2026, 1, 5), "status": "present", "leave_type": "sick"}
    )
    assert log.leave_type is None
