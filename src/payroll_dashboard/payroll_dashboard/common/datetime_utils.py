from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def long_date(value: date) -> str:
    """Footer style date, e.g. ``17 October 2026``."""
    return f"{value.day} {value.strftime('%B %Y')}"


def months_in_year_until(start: date | None, until: date) -> int:
    """Whole months of service counted inside ``until.year``.

    Used for leave accrual; an unknown start date counts from January.
    """

    first_month = 1
    if start is not None:
        if start > until:
            return 0
        if start.year == until.year:
            first_month = start.month
    return until.month - first_month + 1
