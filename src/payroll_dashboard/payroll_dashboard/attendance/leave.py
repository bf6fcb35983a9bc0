from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from ..core.constants import DEFAULT_LEAVE_ENTITLEMENTS
from ..core.enums import AttendanceStatus, LeaveType
from .model import AttendanceLog


@dataclass(frozen=True)
class LeaveBalance:
    annual_accrued: int
    annual_used: int
    annual_balance: int
    sick_entitled: int
    sick_used: int
    sick_balance: int
    comp_entitled: int
    comp_used: int
    comp_balance: int


def leave_balance(
    logs: Iterable[AttendanceLog],
    *,
    months_accrued: int,
    entitlements: Mapping[str, int] = DEFAULT_LEAVE_ENTITLEMENTS,
) -> LeaveBalance:
    """Annual/sick/compassionate balances from one employee's leave logs.

    Annual leave accrues per month of service; sick and compassionate leave
    are flat yearly entitlements. Balances may go negative (over-use).
    """

    used = {LeaveType.ANNUAL: 0, LeaveType.SICK: 0, LeaveType.COMPASSIONATE: 0}
    for log in logs:
        if log.status != AttendanceStatus.LEAVE or log.leave_type not in used:
            continue
        used[log.leave_type] += 1

    annual = int(entitlements["annual_days_per_month"]) * max(months_accrued, 0)
    sick = int(entitlements["sick_days"])
    comp = int(entitlements["compassionate_days"])

    return LeaveBalance(
        annual_accrued=annual,
        annual_used=used[LeaveType.ANNUAL],
        annual_balance=annual - used[LeaveType.ANNUAL],
        sick_entitled=sick,
        sick_used=used[LeaveType.SICK],
        sick_balance=sick - used[LeaveType.SICK],
        comp_entitled=comp,
        comp_used=used[LeaveType.COMPASSIONATE],
        comp_balance=comp - used[LeaveType.COMPASSIONATE],
    )
