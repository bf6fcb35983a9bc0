from datetime import date

from src.payroll_dashboard.payroll_dashboard.attendance.leave import leave_balance
from src.payroll_dashboard.payroll_dashboard.attendance.model import AttendanceLog
from src.payroll_dashboard.payroll_dashboard.common.datetime_utils import months_in_year_until
from src.payroll_dashboard.payroll_dashboard.core.enums import AttendanceStatus, LeaveType


def _leave(day, leave_type):
    return AttendanceLog("e-1", "b", date(2026, 3, day), AttendanceStatus.LEAVE, leave_type=leave_type)


def test_balances_count_leave_days_by_type():
    logs = [
        _leave(1, LeaveType.ANNUAL),
        _leave(2, LeaveType.ANNUAL),
        _leave(3, LeaveType.SICK),
        _leave(4, LeaveType.UNPAID),
        AttendanceLog("e-1", "b", date(2026, 3, 5), AttendanceStatus.PRESENT),
    ]

    lb = leave_balance(logs, months_accrued=3)

    assert (lb.annual_accrued, lb.annual_used, lb.annual_balance) == (6, 2, 4)
    assert (lb.sick_entitled, lb.sick_used, lb.sick_balance) == (10, 1, 9)
    assert (lb.comp_entitled, lb.comp_used, lb.comp_balance) == (5, 0, 5)


def test_months_of_service_inside_the_year():
    assert months_in_year_until(None, date(2026, 3, 31)) == 3
    assert months_in_year_until(date(2024, 6, 1), date(2026, 3, 31)) == 3
    assert months_in_year_until(date(2026, 2, 15), date(2026, 3, 31)) == 2
    assert months_in_year_until(date(2026, 5, 1), date(2026, 3, 31)) == 0
