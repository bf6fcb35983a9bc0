from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..payroll.model import PayrollRow
from .model import EmployeeContact
from .repository import EmployeeRepository

SORTABLE_COLUMNS = {
    "full_name",
    "branch_name",
    "position",
    "gross_salary",
    "napsa_employee",
    "nhima_employee",
    "extra_shifts_count",
    "shortage_amount",
    "advances",
    "net_salary_due",
}

_COMPLETENESS_FIELDS = ("phone", "email", "mobile_money_number", "home_address", "emergency_contact_phone")


def filter_rows(
    rows: Sequence[PayrollRow],
    *,
    branch: Optional[str] = None,
    search: str = "",
    sort_col: str = "full_name",
    sort_dir: str = "asc",
) -> list[PayrollRow]:
    """Employee table: branch filter, name/position search, column sort."""

    if sort_col not in SORTABLE_COLUMNS:
        sort_col = "full_name"
    q = (search or "").strip().lower()

    out = [
        r
        for r in rows
        if (not branch or r.branch_name == branch)
        and (not q or q in r.full_name.lower() or q in r.position.lower())
    ]

    def key(row: PayrollRow):
        value = row.as_dict()[sort_col]
        if isinstance(value, str):
            return value.lower()
        return Decimal(value or 0)

    out.sort(key=key, reverse=(sort_dir == "desc"))
    return out


def contact_completeness(contact: EmployeeContact) -> int:
    filled = sum(1 for f in _COMPLETENESS_FIELDS if getattr(contact, f))
    return round(filled * 100 / len(_COMPLETENESS_FIELDS))


def directory_stats(contacts: Sequence[EmployeeContact]) -> dict[str, int]:
    return {
        "total": len(contacts),
        "with_phone": sum(1 for c in contacts if c.phone),
        "with_email": sum(1 for c in contacts if c.email),
        "with_address": sum(1 for c in contacts if c.home_address),
        "with_mobile_money": sum(1 for c in contacts if c.mobile_money_number),
        "with_emergency": sum(1 for c in contacts if c.emergency_contact_phone),
    }


class DirectoryService:
    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_contacts(self, *, branch: Optional[str] = None, search: str = "") -> list[EmployeeContact]:
        q = (search or "").strip().lower()

        def matches(c: EmployeeContact) -> bool:
            if not q:
                return True
            haystack = (c.full_name, c.position, c.phone, c.email, c.nrc_number)
            return any(q in (v or "").lower() for v in haystack)

        out = [c for c in self._employees.list_contacts() if (not branch or c.branch_name == branch) and matches(c)]
        out.sort(key=lambda c: c.full_name.lower())
        return out
