from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.payroll_dashboard.payroll_dashboard.attendance.model import AttendanceLog
from src.payroll_dashboard.payroll_dashboard.attendance.service import DailyLogService
from src.payroll_dashboard.payroll_dashboard.core.enums import AttendanceStatus, LeaveType
from src.payroll_dashboard.payroll_dashboard.core.exceptions import AuthorizationError, NotFoundError, ValidationError

from tests.fakes import FakeBranchesRepo, FakeEmployeesRepo, FakeLogsRepo


@pytest.fixture
def logs_repo():
    return FakeLogsRepo(
        [
            AttendanceLog(
                employee_id="e-2",
                branch_id="b-lusaka",
                log_date=date(2026, 1, 19),
                status=AttendanceStatus.ABSENT,
                comments="No show",
            )
        ]
    )


@pytest.fixture
def service(logs_repo, employees, branches, fixed_clock):
    return DailyLogService(
        logs_repo,
        FakeEmployeesRepo(employees),
        FakeBranchesRepo(branches),
        edit_window_days=3,
        clock=fixed_clock,
    )


def test_load_sheet_defaults_and_prefills(service, lusaka_manager):
    entries = service.load_sheet(lusaka_manager, branch_id="b-lusaka", log_date=date(2026, 1, 19))

    assert [e.full_name for e in entries] == ["Bupe Phiri", "Chanda Mulenga"]
    bupe, chanda = entries
    assert bupe.status == AttendanceStatus.ABSENT
    assert bupe.saved is True
    assert bupe.comments == "No show"
    assert chanda.status == AttendanceStatus.PRESENT
    assert chanda.saved is False
    assert chanda.shortage_amount == Decimal("0.00")


def test_save_sheet_normalizes_entries(service, logs_repo, lusaka_manager):
    saved = service.save_sheet(
        lusaka_manager,
        branch_id="b-lusaka",
        log_date=date(2026, 1, 20),
        entries=[
            {"employee_id": "e-1", "attendance_status": "extra_shift", "shortage_amount": "1,200.50"},
            {"employee_id": "e-2", "attendance_status": "present", "leave_type": "sick", "arrival_time": "07:55"},
        ],
    )

    assert saved == 2
    first = logs_repo.logs[("e-1", date(2026, 1, 20))]
    second = logs_repo.logs[("e-2", date(2026, 1, 20))]
    assert first.extra_shifts_worked == Decimal("1.00")
    assert first.shortage_amount == Decimal("1200.50")
    assert second.leave_type is None
    assert second.arrival_time.strftime("%H:%M") == "07:55"


def test_save_sheet_keeps_leave_type_for_leave(service, logs_repo, lusaka_manager):
    service.save_sheet(
        lusaka_manager,
        branch_id="b-lusaka",
        log_date=date(2026, 1, 20),
        entries=[{"employee_id": "e-1", "attendance_status": "leave", "leave_type": "annual"}],
    )
    assert logs_repo.logs[("e-1", date(2026, 1, 20))].leave_type == LeaveType.ANNUAL


def test_saving_twice_overwrites(service, logs_repo, lusaka_manager):
    for status in ("present", "late"):
        service.save_sheet(
            lusaka_manager,
            branch_id="b-lusaka",
            log_date=date(2026, 1, 20),
            entries=[{"employee_id": "e-1", "attendance_status": status}],
        )

    rows = [log for log in logs_repo.logs.values() if log.employee_id == "e-1"]
    assert len(rows) == 1
    assert rows[0].status == AttendanceStatus.LATE


def test_rejects_unknown_status(service, lusaka_manager):
    with pytest.raises(ValidationError):
        service.save_sheet(
            lusaka_manager,
            branch_id="b-lusaka",
            log_date=date(2026, 1, 20),
            entries=[{"employee_id": "e-1", "attendance_status": "sleeping"}],
        )


def test_rejects_negative_amounts(service, lusaka_manager):
    with pytest.raises(ValidationError):
        service.save_sheet(
            lusaka_manager,
            branch_id="b-lusaka",
            log_date=date(2026, 1, 20),
            entries=[{"employee_id": "e-1", "attendance_status": "present", "fine_amount": "-5"}],
        )


def test_rejects_future_date(service, super_admin):
    with pytest.raises(ValidationError):
        service.save_sheet(
            super_admin,
            branch_id="b-lusaka",
            log_date=date(2026, 1, 21),
            entries=[{"employee_id": "e-1", "attendance_status": "present"}],
        )


def test_edit_window_applies_to_branch_managers_only(service, lusaka_manager, super_admin):
    old = date(2026, 1, 10)
    entries = [{"employee_id": "e-1", "attendance_status": "present"}]

    with pytest.raises(AuthorizationError):
        service.save_sheet(lusaka_manager, branch_id="b-lusaka", log_date=old, entries=entries)

    assert service.save_sheet(super_admin, branch_id="b-lusaka", log_date=old, entries=entries) == 1


def test_manager_cannot_touch_other_branch(service, lusaka_manager):
    with pytest.raises(AuthorizationError):
        service.load_sheet(lusaka_manager, branch_id="b-kitwe", log_date=date(2026, 1, 20))


def test_rejects_employee_from_another_branch(service, super_admin):
    with pytest.raises(ValidationError):
        service.save_sheet(
            super_admin,
            branch_id="b-lusaka",
            log_date=date(2026, 1, 20),
            entries=[{"employee_id": "e-3", "attendance_status": "present"}],
        )


def test_unknown_branch(service, super_admin):
    with pytest.raises(NotFoundError):
        service.save_sheet(
            super_admin,
            branch_id="b-nowhere",
            log_date=date(2026, 1, 20),
            entries=[{"employee_id": "e-1", "attendance_status": "present"}],
        )


def test_mark_all_present_and_counts(service, lusaka_manager):
    entries = service.load_sheet(lusaka_manager, branch_id="b-lusaka", log_date=date(2026, 1, 19))
    assert DailyLogService.status_counts(entries) == {"absent": 1, "present": 1}

    filled = DailyLogService.mark_all_present(entries)
    assert DailyLogService.status_counts(filled) == {"present": 2}


def test_branch_picker_respects_assignments(service, lusaka_manager, super_admin):
    assert [b.branch_id for b in service.branches_for(lusaka_manager)] == ["b-lusaka"]
    assert len(service.branches_for(super_admin)) == 2
