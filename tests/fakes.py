"""In-memory repositories shared by the service tests."""

from __future__ import annotations

RULES_2026 = {
    "tax_year": 2026,
    "extra_shift_rate": "150.00",
    "absence_daily_rate": "50.00",
    "napsa_rate": "0.05",
    "napsa_ceiling": "34164.00",
    "nhima_rate": "0.01",
    "paye_bands": [["5100.00", "0"], ["7100.00", "0.20"], ["9200.00", "0.30"], [None, "0.37"]],
}


class FakeEmployeesRepo:
    def __init__(self, employees=(), contacts=()):
        self._employees = {e.employee_id: e for e in employees}
        self._contacts = list(contacts)

    def get_by_ids(self, employee_ids):
        return [self._employees[i] for i in employee_ids if i in self._employees]

    def list_active(self, *, branch_id=None):
        out = [e for e in self._employees.values() if e.is_active]
        if branch_id is not None:
            out = [e for e in out if e.branch_id == branch_id]
        return sorted(out, key=lambda e: e.full_name)

    def list_contacts(self):
        return list(self._contacts)


class FakeBranchesRepo:
    def __init__(self, branches=()):
        self._branches = {b.branch_id: b for b in branches}

    def get_by_id(self, branch_id):
        return self._branches.get(branch_id)

    def get_by_ids(self, branch_ids):
        return [self._branches[i] for i in branch_ids if i in self._branches]

    def list_active(self):
        return [b for b in self._branches.values() if b.is_active]


class FakeLogsRepo:
    def __init__(self, logs=()):
        self.logs = {(log.employee_id, log.log_date): log for log in logs}

    def get_logs_between(self, *, start_date, end_date, employee_id=None):
        return [
            log
            for log in self.logs.values()
            if start_date <= log.log_date <= end_date
            and (employee_id is None or log.employee_id == employee_id)
        ]

    def get_for_branch_and_date(self, *, branch_id, log_date):
        return [log for log in self.logs.values() if log.branch_id == branch_id and log.log_date == log_date]

    def upsert_logs(self, logs):
        for log in logs:
            self.logs[(log.employee_id, log.log_date)] = log
        return len(logs)


class FakePayrollRepo:
    def __init__(self, periods=()):
        self._periods = {p.period_id: p for p in periods}
        self.records = {}
        self.replace_calls = []

    def list_periods(self):
        return sorted(self._periods.values(), key=lambda p: p.start_date, reverse=True)

    def get_period(self, period_id):
        return self._periods.get(period_id)

    def get_period_by_name(self, period_name):
        return next((p for p in self._periods.values() if p.period_name == period_name), None)

    def get_records(self, period_id):
        return list(self.records.get(period_id, []))

    def replace_records(self, period_id, records):
        self.replace_calls.append(period_id)
        self.records[period_id] = list(records)
        return len(records)


class FakeRolesRepo:
    def __init__(self, users=()):
        self._users = {u.email: u for u in users}

    def get_active_by_email(self, email):
        return self._users.get(email)
