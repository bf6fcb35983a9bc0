from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.leave import LeaveBalance


@dataclass(frozen=True)
class PayslipLine:
    label: str
    amount: str
    is_total: bool = False


@dataclass(frozen=True)
class PayslipSection:
    key: str
    title: str
    lines: tuple[PayslipLine, ...]

    @property
    def total(self) -> Optional[PayslipLine]:
        return next((line for line in self.lines if line.is_total), None)


@dataclass(frozen=True)
class PayslipDocument:
    """Layout of one payslip page, with every amount already formatted."""

    employee_id: str
    employee_code: str
    employee_name: str
    position: str
    branch_name: str
    company_name: str
    period_name: str
    period_range: str
    sections: tuple[PayslipSection, ...]
    gross_salary: str
    net_salary_due: str
    footer_lines: tuple[str, ...]
    generated_on: str
    filename: str
    comment: Optional[str] = None
    leave: Optional[LeaveBalance] = None
    needs_review: bool = False

    def section(self, key: str) -> Optional[PayslipSection]:
        return next((s for s in self.sections if s.key == key), None)


@dataclass(frozen=True)
class PayslipError:
    employee_id: str
    message: str


@dataclass(frozen=True)
class PayslipBatch:
    filename: str
    pages: tuple[PayslipDocument, ...] = ()
    errors: tuple[PayslipError, ...] = field(default_factory=tuple)
