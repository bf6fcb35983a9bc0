from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PayrollPeriod, PayrollRecord


class PayrollRepository(Protocol):
    def list_periods(self) -> Sequence[PayrollPeriod]:
        """Newest period first."""

        raise NotImplementedError

    def get_period(self, period_id: str) -> Optional[PayrollPeriod]:
        raise NotImplementedError

    def get_period_by_name(self, period_name: str) -> Optional[PayrollPeriod]:
        raise NotImplementedError

    def get_records(self, period_id: str) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def replace_records(self, period_id: str, records: Sequence[PayrollRecord]) -> int:
        """Store a run's output, replacing what an earlier run stored for the period."""

        raise NotImplementedError
