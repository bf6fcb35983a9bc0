from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import pytest

from src.payroll_dashboard.payroll_dashboard.core.exceptions import ConfigurationError
from src.payroll_dashboard.payroll_dashboard.payroll.model import PayrollPeriod, PayrollRecord
from src.payroll_dashboard.payroll_dashboard.payroll.rules import PayrollRules
from src.payroll_dashboard.payroll_dashboard.payroll.summary import summarize, totals

from tests.fakes import RULES_2026


def _record(employee_id, branch_id, gross, net):
    return PayrollRecord(
        employee_id=employee_id,
        branch_id=branch_id,
        period_id="p-jan",
        basic_salary=Decimal(gross),
        gross_salary=Decimal(gross),
        net_salary_due=Decimal(net),
    )


def test_rules_parse_bands_and_rates(rules):
    assert rules.tax_year == 2026
    assert rules.napsa_rate == Decimal("0.05")
    assert rules.paye_bands[0].upper == Decimal("5100.00")
    assert rules.paye_bands[-1].upper is None


@pytest.mark.parametrize(
    "change",
    [
        {"napsa_rate": "five percent"},
        {"paye_bands": [["5100", "0"], ["4000", "0.2"], [None, "0.3"]]},
        {"paye_bands": [["5100", "0"]]},
        {"paye_bands": []},
        {"paye_bands": [["5100"]]},
        {"paye_bands": [5, [None, "0.3"]]},
        {"tax_year": "next year"},
    ],
)
def test_bad_rule_tables_are_rejected(change):
    with pytest.raises(ConfigurationError):
        PayrollRules.from_dict({**RULES_2026, **change})


def test_missing_rule_key_is_a_configuration_error():
    data = dict(RULES_2026)
    del data["nhima_rate"]
    with pytest.raises(ConfigurationError):
        PayrollRules.from_dict(data)


def test_rules_refuse_another_tax_year_unless_confirmed(rules, caplog):
    period = PayrollPeriod("p-x", "December 2025", date(2025, 12, 1), date(2025, 12, 31))

    with pytest.raises(ConfigurationError):
        rules.check_period(period)

    with caplog.at_level(logging.WARNING):
        rules.check_period(period, confirmed=True)
    assert "explicit confirmation" in caplog.text


def test_summary_net_equals_sum_of_records():
    records = [
        _record("e-1", "b-1", "5000.00", "4600.00"),
        _record("e-2", "b-1", "4200.00", "3950.25"),
        _record("e-3", "b-2", "7200.00", "6400.10"),
    ]
    names = {"b-1": "Lusaka CBD", "b-2": "Kitwe Main"}

    summaries = summarize(records, names.get)
    total = totals(summaries)

    assert [s.branch for s in summaries] == ["Lusaka CBD", "Kitwe Main"]
    assert summaries[0].totals.employees == 2
    assert total.net == sum(r.net_salary_due for r in records)
    assert total.gross == Decimal("16400.00")
    assert total.employees == 3


def test_branches_sharing_a_name_stay_separate():
    records = [_record("e-1", "b-1", "100.00", "90.00"), _record("e-2", "b-2", "100.00", "90.00")]

    summaries = summarize(records, lambda _: "Market")

    assert len(summaries) == 2
    assert {s.branch_id for s in summaries} == {"b-1", "b-2"}


def test_unknown_branch_name_falls_back():
    summaries = summarize([_record("e-1", "b-x", "100.00", "90.00")], {}.get)
    assert summaries[0].branch == "Unknown"
    assert summaries[0].as_dict()["branch"] == "Unknown"
