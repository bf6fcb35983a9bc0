from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Callable, Iterable, Optional, Sequence

from ..common.numbers import ZERO
from ..core.constants import UNKNOWN_NAME
from .model import PayrollRecord


@dataclass(frozen=True)
class BranchTotals:
    employees: int = 0
    gross: Decimal = ZERO
    net: Decimal = ZERO
    napsa: Decimal = ZERO
    nhima: Decimal = ZERO
    paye: Decimal = ZERO
    shortages: Decimal = ZERO
    advances: Decimal = ZERO
    fines: Decimal = ZERO
    extra_shifts: Decimal = ZERO

    def __add__(self, other: "BranchTotals") -> "BranchTotals":
        return BranchTotals(
            employees=self.employees + other.employees,
            gross=self.gross + other.gross,
            net=self.net + other.net,
            napsa=self.napsa + other.napsa,
            nhima=self.nhima + other.nhima,
            paye=self.paye + other.paye,
            shortages=self.shortages + other.shortages,
            advances=self.advances + other.advances,
            fines=self.fines + other.fines,
            extra_shifts=self.extra_shifts + other.extra_shifts,
        )

    @classmethod
    def of(cls, record: PayrollRecord) -> "BranchTotals":
        return cls(
            employees=1,
            gross=record.gross_salary,
            net=record.net_salary_due,
            napsa=record.napsa_employee,
            nhima=record.nhima_employee,
            paye=record.paye_tax,
            shortages=record.shortage_amount,
            advances=record.advances,
            fines=record.fines,
            extra_shifts=record.extra_shift_total,
        )

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class BranchSummary:
    branch_id: str
    branch: str
    totals: BranchTotals

    def as_dict(self) -> dict:
        return {"branch_id": self.branch_id, "branch": self.branch, **self.totals.as_dict()}


def summarize(
    records: Iterable[PayrollRecord],
    branch_name_of: Callable[[str], Optional[str]],
) -> list[BranchSummary]:
    """Column sums per branch, largest branch first.

    Grouping uses the branch id; two branches sharing a display name stay
    separate rows.
    """

    by_branch: dict[str, BranchTotals] = {}
    for r in records:
        by_branch[r.branch_id] = by_branch.get(r.branch_id, BranchTotals()) + BranchTotals.of(r)

    summaries = [
        BranchSummary(branch_id=branch_id, branch=branch_name_of(branch_id) or UNKNOWN_NAME, totals=t)
        for branch_id, t in by_branch.items()
    ]
    summaries.sort(key=lambda s: (-s.totals.employees, s.branch, s.branch_id))
    return summaries


def totals(summaries: Sequence[BranchSummary]) -> BranchTotals:
    out = BranchTotals()
    for s in summaries:
        out = out + s.totals
    return out
