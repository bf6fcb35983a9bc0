from __future__ import annotations

import csv
import io
from datetime import date
from decimal import Decimal

import pytest
from flask import Flask

from src.payroll_dashboard.payroll_dashboard.attendance.controller import register as register_attendance
from src.payroll_dashboard.payroll_dashboard.attendance.model import AttendanceLog
from src.payroll_dashboard.payroll_dashboard.attendance.service import DailyLogService
from src.payroll_dashboard.payroll_dashboard.container import Container
from src.payroll_dashboard.payroll_dashboard.core.enums import AttendanceStatus
from src.payroll_dashboard.payroll_dashboard.employees.controller import register as register_employees
from src.payroll_dashboard.payroll_dashboard.employees.model import EmployeeContact
from src.payroll_dashboard.payroll_dashboard.employees.service import DirectoryService
from src.payroll_dashboard.payroll_dashboard.payroll.controller import register as register_payroll
from src.payroll_dashboard.payroll_dashboard.payroll.service import PayrollService
from src.payroll_dashboard.payroll_dashboard.payslips.projector import PayslipProjector
from src.payroll_dashboard.payroll_dashboard.users.controller import register as register_users
from src.payroll_dashboard.payroll_dashboard.users.service import SessionService

from tests.fakes import FakeBranchesRepo, FakeEmployeesRepo, FakeLogsRepo, FakePayrollRepo, FakeRolesRepo


@pytest.fixture
def app(employees, branches, january, rules, super_admin, lusaka_manager, fixed_clock):
    employees_repo = FakeEmployeesRepo(
        employees,
        contacts=[EmployeeContact("e-1", "Chanda Mulenga", "b-lusaka", "Lusaka CBD", "cashier", phone="+260971000002")],
    )
    branches_repo = FakeBranchesRepo(branches)
    logs_repo = FakeLogsRepo(
        [AttendanceLog("e-1", "b-lusaka", date(2026, 1, 5), AttendanceStatus.ABSENT, shortage_amount=Decimal("200.00"))]
    )
    payroll_repo = FakePayrollRepo([january])
    roles_repo = FakeRolesRepo([super_admin, lusaka_manager])

    container = Container(
        conn=None,
        rules=rules,
        employees_repo=employees_repo,
        branches_repo=branches_repo,
        logs_repo=logs_repo,
        payroll_repo=payroll_repo,
        roles_repo=roles_repo,
        session_service=SessionService(roles_repo),
        daily_log_service=DailyLogService(logs_repo, employees_repo, branches_repo, clock=fixed_clock),
        payroll_service=PayrollService(
            payroll_repo,
            logs_repo,
            employees_repo,
            branches_repo,
            rules=rules,
            projector=PayslipProjector(company_name="BwanaBet", rules=rules),
            clock=fixed_clock,
        ),
        directory_service=DirectoryService(employees_repo),
    )

    app = Flask(__name__)
    app.secret_key = "test"
    app.config["TESTING"] = True
    register_users(app, container)
    register_attendance(app, container)
    register_employees(app, container)
    register_payroll(app, container)
    return app


def _client(app, email=None):
    client = app.test_client()
    if email:
        with client.session_transaction() as sess:
            sess["email"] = email
    return client


def test_anonymous_requests_are_rejected(app):
    assert _client(app).get("/api/dashboard").status_code == 401


def test_unassigned_email_is_forbidden(app):
    assert _client(app, "stranger@example.com").get("/api/me").status_code == 403


def test_payroll_endpoints_need_super_admin(app):
    client = _client(app, "manager@bwanabet.test")
    assert client.get("/api/payroll/periods").status_code == 403
    assert client.post("/api/payroll/p-jan/generate", json={}).status_code == 403


def test_generate_then_dashboard_and_csv(app):
    client = _client(app, "admin@bwanabet.test")

    resp = client.post("/api/payroll/p-jan/generate", json={"adjustments": {"e-3": {"bonus": "100"}}})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["totals"]["count"] == 3
    assert len(body["records"]) == 3

    dash = client.get("/api/dashboard", query_string={"period": "January 2026"}).get_json()
    assert dash["employees"] == 3
    assert dash["branches"] == 2

    resp = client.get("/api/branches.csv", query_string={"period": "January 2026"})
    assert resp.mimetype == "text/csv"
    rows = list(csv.DictReader(io.StringIO(resp.data.decode("utf-8-sig"))))
    assert [r["branch"] for r in rows][-1] == "TOTAL"
    assert rows[-1]["employees"] == "3"

    employees = client.get(
        "/api/employees",
        query_string={"period": "January 2026", "branch": "Lusaka CBD", "sort": "net_salary_due"},
    ).get_json()
    assert employees["count"] == 2


def test_branch_manager_sees_own_branch_only(app):
    _client(app, "admin@bwanabet.test").post("/api/payroll/p-jan/generate", json={})

    body = _client(app, "manager@bwanabet.test").get("/api/branches", query_string={"period": "January 2026"}).get_json()
    assert [b["branch"] for b in body["branches"]] == ["Lusaka CBD"]


def test_preview_and_missing_period(app):
    client = _client(app, "admin@bwanabet.test")

    body = client.get("/api/payroll/p-jan/preview").get_json()
    assert body["no_logs_count"] == 2
    assert body["rows"][0]["days_absent"] == 1

    assert client.get("/api/payroll/p-nope/preview").status_code == 404


def test_daily_sheet_roundtrip(app):
    client = _client(app, "manager@bwanabet.test")

    resp = client.post(
        "/api/daily",
        json={
            "branch_id": "b-lusaka",
            "log_date": "2026-01-20",
            "entries": [{"employee_id": "e-1", "attendance_status": "late", "arrival_time": "08:20"}],
        },
    )
    assert resp.get_json() == {"success": True, "saved": 1}

    sheet = client.get("/api/daily?branch_id=b-lusaka&date=2026-01-20").get_json()
    chanda = next(e for e in sheet["entries"] if e["employee_id"] == "e-1")
    assert chanda["attendance_status"] == "late"
    assert chanda["arrival_time"] == "08:20"
    assert sheet["status_counts"] == {"late": 1, "present": 1}


def test_daily_sheet_validation_errors(app):
    client = _client(app, "manager@bwanabet.test")

    assert client.get("/api/daily").status_code == 400
    assert client.get("/api/daily?branch_id=b-lusaka&date=20-01-2026").status_code == 400
    assert client.get("/api/daily?branch_id=b-kitwe&date=2026-01-20").status_code == 403


def test_directory_for_super_admin(app):
    body = _client(app, "admin@bwanabet.test").get("/api/directory").get_json()
    assert body["stats"]["total"] == 1
    assert body["contacts"][0]["completeness"] == 20


def test_me_and_branch_picker(app):
    client = _client(app, "manager@bwanabet.test")

    me = client.get("/api/me").get_json()
    assert me["role"] == "branch_manager"

    body = client.get("/api/daily/branches").get_json()
    assert body["branches"] == [{"branch_id": "b-lusaka", "name": "Lusaka CBD"}]


def test_malformed_request_items_are_bad_requests(app):
    manager = _client(app, "manager@bwanabet.test")
    resp = manager.post("/api/daily", json={"branch_id": "b-lusaka", "log_date": "2026-01-20", "entries": ["x"]})
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False

    admin = _client(app, "admin@bwanabet.test")
    resp = admin.post("/api/payroll/p-jan/generate", json={"adjustments": {"e-1": "100"}})
    assert resp.status_code == 400
