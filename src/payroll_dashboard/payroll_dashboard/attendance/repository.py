from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceLog


class AttendanceLogRepository(Protocol):
    def get_logs_between(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceLog]:
        """Logs with ``start_date <= log_date <= end_date``."""

        raise NotImplementedError

    def get_for_branch_and_date(self, *, branch_id: str, log_date: date) -> Sequence[AttendanceLog]:
        raise NotImplementedError

    def upsert_logs(self, logs: Sequence[AttendanceLog]) -> int:
        """Insert or overwrite by (employee_id, log_date); last write wins."""

        raise NotImplementedError
