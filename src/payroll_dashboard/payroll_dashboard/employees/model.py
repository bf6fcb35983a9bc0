from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import EmploymentStatus


@dataclass(frozen=True)
class Branch:
    branch_id: str
    name: str
    is_active: bool = True


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee on the payroll roster."""

    employee_id: str
    full_name: str
    position: str
    branch_id: str
    basic_pay: Decimal
    employment_status: EmploymentStatus = EmploymentStatus.ACTIVE
    date_started: Optional[date] = None

    @property
    def is_active(self) -> bool:
        return self.employment_status == EmploymentStatus.ACTIVE


@dataclass(frozen=True)
class EmployeeContact:
    """Read-model for the staff directory."""

    employee_id: str
    full_name: str
    branch_id: str
    branch_name: str
    position: str
    phone: Optional[str] = None
    email: Optional[str] = None
    mobile_money_number: Optional[str] = None
    home_address: Optional[str] = None
    nrc_number: Optional[str] = None
    tpin: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    social_security_number: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    date_started: Optional[date] = None
