from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import AttendanceLog
from .repository import AttendanceLogRepository

logger = logging.getLogger(__name__)

_LOG_COLUMNS = """
    employee_id, branch_id, log_date, attendance_status, leave_type, arrival_time,
    shortage_amount, advance_amount, fine_amount, extra_shifts_worked, comments
"""


def _to_logs(rows: List[Dict[str, Any]]) -> List[AttendanceLog]:
    out: List[AttendanceLog] = []
    for r in rows:
        r = dict(r, arrival_time=normalize_mysql_time(r.get("arrival_time")))
        try:
            out.append(AttendanceLog.from_mapping(r))
        except ValidationError as e:
            # One bad row must not poison a whole payroll run.
            logger.warning("Skipping daily log employee=%s date=%s: %s", r.get("employee_id"), r.get("log_date"), e)
    return out


class MySQLAttendanceLogRepository(AttendanceLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_logs_between(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceLog]:
        clauses = ["log_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_LOG_COLUMNS}
                FROM daily_logs
                WHERE {where}
                ORDER BY log_date ASC, employee_id ASC
                """,
                tuple(params),
            )
            return _to_logs(fetchall(cur))

    def get_for_branch_and_date(self, *, branch_id: str, log_date: date) -> Sequence[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_LOG_COLUMNS}
                FROM daily_logs
                WHERE branch_id=%s AND log_date=%s
                """,
                (branch_id, log_date),
            )
            return _to_logs(fetchall(cur))

    def upsert_logs(self, logs: Sequence[AttendanceLog]) -> int:
        if not logs:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO daily_logs(
                    employee_id, branch_id, log_date, attendance_status, leave_type, arrival_time,
                    shortage_amount, advance_amount, fine_amount, extra_shifts_worked, comments
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    branch_id=VALUES(branch_id),
                    attendance_status=VALUES(attendance_status),
                    leave_type=VALUES(leave_type),
                    arrival_time=VALUES(arrival_time),
                    shortage_amount=VALUES(shortage_amount),
                    advance_amount=VALUES(advance_amount),
                    fine_amount=VALUES(fine_amount),
                    extra_shifts_worked=VALUES(extra_shifts_worked),
                    comments=VALUES(comments)
                """,
                [
                    (
                        log.employee_id,
                        log.branch_id,
                        log.log_date,
                        log.status.value,
                        log.leave_type.value if log.leave_type else None,
                        log.arrival_time,
                        log.shortage_amount,
                        log.advance_amount,
                        log.fine_amount,
                        log.extra_shifts_worked,
                        log.comments,
                    )
                    for log in logs
                ],
            )
            return len(logs)
