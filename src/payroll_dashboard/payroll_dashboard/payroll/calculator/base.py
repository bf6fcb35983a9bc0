from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import DailyAggregate
from ...employees.model import Employee
from ..model import PayrollAdjustment, PayrollRecord
from ..rules import PayrollRules


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(
        self,
        employee: Employee,
        aggregate: Optional[DailyAggregate],
        *,
        period_id: str,
        rules: PayrollRules,
        adjustment: Optional[PayrollAdjustment] = None,
    ) -> PayrollRecord:
        raise NotImplementedError
