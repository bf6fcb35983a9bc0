from __future__ import annotations

import logging
from collections import Counter
from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.numbers import to_amount
from ..common.validators import require_choice, require_non_negative
from ..core.constants import DEFAULT_LOG_EDIT_WINDOW_DAYS
from ..core.enums import AttendanceStatus, LeaveType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.model import Branch
from ..employees.repository import BranchRepository, EmployeeRepository
from ..users.model import UserSession
from ..users.service import SessionService
from .model import AttendanceLog, LogEntry
from .repository import AttendanceLogRepository

logger = logging.getLogger(__name__)


class DailyLogService:
    """Use cases behind the daily log sheet: load one branch/date, save it back."""

    def __init__(
        self,
        logs: AttendanceLogRepository,
        employees: EmployeeRepository,
        branches: BranchRepository,
        *,
        edit_window_days: int = DEFAULT_LOG_EDIT_WINDOW_DAYS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._logs = logs
        self._employees = employees
        self._branches = branches
        self._edit_window_days = int(edit_window_days)
        self._clock = clock

    @staticmethod
    def _parse_time(value: Any) -> Optional[time]:
        if isinstance(value, time):
            return value
        v = str(value or "").strip()
        if not v:
            return None
        try:
            return datetime.strptime(v[:5], "%H:%M").time()
        except ValueError:
            raise ValidationError("arrival_time must be HH:MM")

    def _check_access(self, user: UserSession, *, branch_id: str, log_date: date) -> None:
        if not self._branches.get_by_id(branch_id):
            raise NotFoundError("Branch not found")
        SessionService.require_branch(user, branch_id)

        today = self._clock().date()
        if log_date > today:
            raise ValidationError("Cannot log a future date")
        if not user.is_super_admin and (today - log_date).days >= self._edit_window_days:
            raise AuthorizationError(f"Logs older than {self._edit_window_days} days are locked")

    def branches_for(self, user: UserSession) -> list[Branch]:
        """Active branches the user may keep logs for."""
        return [b for b in self._branches.list_active() if user.can_access_branch(b.branch_id)]

    def load_sheet(self, user: UserSession, *, branch_id: str, log_date: date) -> list[LogEntry]:
        """One entry per active employee of the branch, pre-filled from saved logs."""

        SessionService.require_branch(user, branch_id)
        employees = self._employees.list_active(branch_id=branch_id)
        existing = {log.employee_id: log for log in self._logs.get_for_branch_and_date(branch_id=branch_id, log_date=log_date)}

        entries: list[LogEntry] = []
        for e in employees:
            log = existing.get(e.employee_id)
            if not log:
                entries.append(LogEntry(employee_id=e.employee_id, full_name=e.full_name, position=e.position))
                continue
            entries.append(
                LogEntry(
                    employee_id=e.employee_id,
                    full_name=e.full_name,
                    position=e.position,
                    status=log.status,
                    leave_type=log.leave_type,
                    arrival_time=log.arrival_time,
                    shortage_amount=log.shortage_amount,
                    advance_amount=log.advance_amount,
                    fine_amount=log.fine_amount,
                    extra_shifts_worked=log.extra_shifts_worked,
                    comments=log.comments or "",
                    saved=True,
                )
            )
        return entries

    def _normalize(self, raw: Mapping[str, Any], *, branch_id: str, log_date: date) -> AttendanceLog:
        if not isinstance(raw, Mapping):
            raise ValidationError("Each entry must be an object")
        status = require_choice(raw.get("attendance_status"), AttendanceStatus, "attendance_status")

        leave_type = None
        if status == AttendanceStatus.LEAVE and raw.get("leave_type"):
            leave_type = require_choice(raw["leave_type"], LeaveType, "leave_type")

        amounts = {
            name: require_non_negative(to_amount(raw.get(name)), name)
            for name in ("shortage_amount", "advance_amount", "fine_amount", "extra_shifts_worked")
        }
        if status == AttendanceStatus.EXTRA_SHIFT and amounts["extra_shifts_worked"] == 0:
            amounts["extra_shifts_worked"] = Decimal("1.00")

        return AttendanceLog(
            employee_id=str(raw.get("employee_id") or ""),
            branch_id=branch_id,
            log_date=log_date,
            status=status,
            leave_type=leave_type,
            arrival_time=self._parse_time(raw.get("arrival_time")),
            comments=(str(raw.get("comments") or "").strip() or None),
            **amounts,
        )

    def save_sheet(
        self,
        user: UserSession,
        *,
        branch_id: str,
        log_date: date,
        entries: Sequence[Mapping[str, Any]],
    ) -> int:
        """Validate and upsert a branch's logs for one date; returns rows saved."""

        self._check_access(user, branch_id=branch_id, log_date=log_date)

        roster = {e.employee_id for e in self._employees.list_active(branch_id=branch_id)}
        logs = [self._normalize(raw, branch_id=branch_id, log_date=log_date) for raw in entries]
        for log in logs:
            if log.employee_id not in roster:
                raise ValidationError(f"Employee {log.employee_id or '?'} is not active in this branch")

        saved = self._logs.upsert_logs(logs)
        logger.info("Saved %d daily logs branch=%s date=%s by=%s", saved, branch_id, log_date, user.email)
        return saved

    @staticmethod
    def mark_all_present(entries: Sequence[LogEntry]) -> list[LogEntry]:
        return [replace(e, status=AttendanceStatus.PRESENT, saved=False) for e in entries]

    @staticmethod
    def status_counts(entries: Sequence[LogEntry]) -> dict[str, int]:
        return dict(Counter(e.status.value for e in entries))
