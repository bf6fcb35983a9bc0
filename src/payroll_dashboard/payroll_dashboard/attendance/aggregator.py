from __future__ import annotations

from typing import AbstractSet, Iterable

from ..core.enums import AttendanceStatus
from .model import AttendanceLog, DailyAggregate

_STATUS_COUNTER = {
    AttendanceStatus.PRESENT: "days_present",
    AttendanceStatus.LATE: "days_late",
    AttendanceStatus.ABSENT: "days_absent",
    AttendanceStatus.LEAVE: "days_leave",
    AttendanceStatus.DAY_OFF: "days_off",
    AttendanceStatus.EXTRA_SHIFT: "days_extra_shift",
}


def aggregate(logs: Iterable[AttendanceLog], active_employee_ids: AbstractSet[str]) -> dict[str, DailyAggregate]:
    """Fold a period's daily logs into per-employee totals.

    ``logs`` are expected to be filtered to the period already. Logs of
    employees outside ``active_employee_ids`` are ignored, and employees
    without logs are simply missing from the result (see ``employees_without_logs``).
    """

    out: dict[str, DailyAggregate] = {}
    for log in logs:
        if log.employee_id not in active_employee_ids:
            continue

        agg = out.get(log.employee_id)
        if agg is None:
            agg = DailyAggregate(employee_id=log.employee_id, branch_id=log.branch_id)
            out[log.employee_id] = agg

        counter = _STATUS_COUNTER[log.status]
        setattr(agg, counter, getattr(agg, counter) + 1)
        agg.total_days_logged += 1

        # Extra shifts are counted on any status, not only on extra_shift days.
        agg.total_extra_shifts += log.extra_shifts_worked
        agg.total_shortages += log.shortage_amount
        agg.total_advances += log.advance_amount
        agg.total_fines += log.fine_amount

    return out


def employees_without_logs(aggregates: dict[str, DailyAggregate], active_employee_ids: AbstractSet[str]) -> set[str]:
    return set(active_employee_ids) - set(aggregates)
