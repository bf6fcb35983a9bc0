from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.numbers import ZERO, to_amount
from ..common.validators import require_choice
from ..core.enums import AttendanceStatus, LeaveType


@dataclass(frozen=True)
class AttendanceLog:
    """Domain entity: one employee's daily log, unique per (employee_id, log_date)."""

    employee_id: str
    branch_id: str
    log_date: date
    status: AttendanceStatus
    leave_type: Optional[LeaveType] = None
    arrival_time: Optional[time] = None
    shortage_amount: Decimal = ZERO
    advance_amount: Decimal = ZERO
    fine_amount: Decimal = ZERO
    extra_shifts_worked: Decimal = ZERO
    comments: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AttendanceLog":
        """Build a log from a raw row.

        Amounts go through ``to_amount`` so malformed values count as zero.
        The status must be known; raises ``ValidationError`` otherwise.
        """

        status = require_choice(data.get("attendance_status", data.get("status")), AttendanceStatus, "attendance_status")
        leave_type = None
        if status == AttendanceStatus.LEAVE and data.get("leave_type"):
            leave_type = require_choice(data["leave_type"], LeaveType, "leave_type")

        return cls(
            employee_id=str(data["employee_id"]),
            branch_id=str(data["branch_id"]),
            log_date=data["log_date"],
            status=status,
            leave_type=leave_type,
            arrival_time=data.get("arrival_time"),
            shortage_amount=to_amount(data.get("shortage_amount")),
            advance_amount=to_amount(data.get("advance_amount")),
            fine_amount=to_amount(data.get("fine_amount")),
            extra_shifts_worked=to_amount(data.get("extra_shifts_worked")),
            comments=data.get("comments") or None,
        )


@dataclass
class DailyAggregate:
    """Per-employee totals over a period's daily logs.

    Every log increments exactly one status counter, so the counters always
    add up to ``total_days_logged``.
    """

    employee_id: str
    branch_id: str
    days_present: int = 0
    days_late: int = 0
    days_absent: int = 0
    days_leave: int = 0
    days_off: int = 0
    days_extra_shift: int = 0
    total_extra_shifts: Decimal = ZERO
    total_shortages: Decimal = ZERO
    total_advances: Decimal = ZERO
    total_fines: Decimal = ZERO
    total_days_logged: int = 0

    @property
    def status_days_total(self) -> int:
        return (
            self.days_present
            + self.days_late
            + self.days_absent
            + self.days_leave
            + self.days_off
            + self.days_extra_shift
        )


@dataclass(frozen=True)
class LogEntry:
    """One row of the daily log sheet (an active employee on a given date)."""

    employee_id: str
    full_name: str
    position: str
    status: AttendanceStatus = AttendanceStatus.PRESENT
    leave_type: Optional[LeaveType] = None
    arrival_time: Optional[time] = None
    shortage_amount: Decimal = ZERO
    advance_amount: Decimal = ZERO
    fine_amount: Decimal = ZERO
    extra_shifts_worked: Decimal = ZERO
    comments: str = ""
    saved: bool = False
