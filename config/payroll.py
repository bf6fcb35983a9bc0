"""Payroll rule table and leave entitlements shared by every environment.

Defaults are the Zambian 2025 statutory figures; each value can be
overridden from the environment so a new tax year does not need a release.
"""

import json
import os

ZM_2025_PAYE_BANDS = [
    ["5100.00", "0"],
    ["7100.00", "0.20"],
    ["9200.00", "0.30"],
    [None, "0.37"],
]


def payroll_rules_from_env() -> dict:
    bands = os.getenv("PAYE_BANDS")
    return {
        "tax_year": int(os.getenv("PAYROLL_TAX_YEAR", "2025")),
        "extra_shift_rate": os.getenv("EXTRA_SHIFT_RATE", "150.00"),
        "absence_daily_rate": os.getenv("ABSENCE_DAILY_RATE", "50.00"),
        "napsa_rate": os.getenv("NAPSA_RATE", "0.05"),
        "napsa_ceiling": os.getenv("NAPSA_CEILING", "34164.00"),
        "nhima_rate": os.getenv("NHIMA_RATE", "0.01"),
        # JSON list of [upper-or-null, rate] pairs, lowest band first.
        "paye_bands": json.loads(bands) if bands else ZM_2025_PAYE_BANDS,
    }


def leave_entitlements_from_env() -> dict:
    return {
        "annual_days_per_month": int(os.getenv("ANNUAL_LEAVE_DAYS_PER_MONTH", "2")),
        "sick_days": int(os.getenv("SICK_LEAVE_DAYS", "10")),
        "compassionate_days": int(os.getenv("COMPASSIONATE_LEAVE_DAYS", "5")),
    }
