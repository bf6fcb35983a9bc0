from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.payroll_dashboard.payroll_dashboard.core.enums import EmploymentStatus, Role
from src.payroll_dashboard.payroll_dashboard.employees.model import Branch, Employee
from src.payroll_dashboard.payroll_dashboard.payroll.model import PayrollPeriod
from src.payroll_dashboard.payroll_dashboard.payroll.rules import PayrollRules
from src.payroll_dashboard.payroll_dashboard.users.model import UserSession

from tests.fakes import RULES_2026


@pytest.fixture
def rules():
    return PayrollRules.from_dict(RULES_2026)


@pytest.fixture
def branches():
    return [
        Branch(branch_id="b-lusaka", name="Lusaka CBD"),
        Branch(branch_id="b-kitwe", name="Kitwe Main"),
    ]


@pytest.fixture
def employees():
    return [
        Employee("e-1", "Chanda Mulenga", "cashier", "b-lusaka", Decimal("5000.00")),
        Employee("e-2", "Bupe Phiri", "security", "b-lusaka", Decimal("4200.00")),
        Employee("e-3", "Natasha Zulu", "assistant_manager", "b-kitwe", Decimal("7200.00")),
        Employee("e-4", "Joseph Sakala", "biker", "b-kitwe", Decimal("3800.00"), EmploymentStatus.INACTIVE),
    ]


@pytest.fixture
def january():
    return PayrollPeriod("p-jan", "January 2026", date(2026, 1, 1), date(2026, 1, 31))


@pytest.fixture
def super_admin():
    return UserSession(email="admin@bwanabet.test", display_name="Admin", role=Role.SUPER_ADMIN)


@pytest.fixture
def lusaka_manager():
    return UserSession(
        email="manager@bwanabet.test",
        display_name="Manager",
        role=Role.BRANCH_MANAGER,
        branch_ids=frozenset({"b-lusaka"}),
    )


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2026, 1, 20, 9, 30)
