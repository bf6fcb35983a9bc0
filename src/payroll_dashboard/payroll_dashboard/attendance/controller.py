from __future__ import annotations

from datetime import date

from flask import Flask, g, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..core.exceptions import ValidationError
from ..container import Container
from ..users.controller import api_endpoint
from .model import LogEntry
from .service import DailyLogService


def _entry_json(e: LogEntry) -> dict:
    return {
        "employee_id": e.employee_id,
        "full_name": e.full_name,
        "position": e.position,
        "attendance_status": e.status.value,
        "leave_type": e.leave_type.value if e.leave_type else None,
        "arrival_time": e.arrival_time.strftime("%H:%M") if e.arrival_time else None,
        "shortage_amount": e.shortage_amount,
        "advance_amount": e.advance_amount,
        "fine_amount": e.fine_amount,
        "extra_shifts_worked": e.extra_shifts_worked,
        "comments": e.comments,
        "saved": e.saved,
    }


def _parse_date(value: str | None) -> date:
    if not value:
        return now_local().date()
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError("Date must be YYYY-MM-DD")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/daily/branches", methods=["GET"], endpoint="daily_branches")
    @api_endpoint(container)
    def daily_branches():
        branches = container.daily_log_service.branches_for(g.user)
        return jsonify({"branches": [{"branch_id": b.branch_id, "name": b.name} for b in branches]})

    @app.route("/api/daily", methods=["GET"], endpoint="daily_sheet")
    @api_endpoint(container)
    def daily_sheet():
        branch_id = (request.args.get("branch_id") or "").strip()
        if not branch_id:
            raise ValidationError("branch_id is required")
        log_date = _parse_date(request.args.get("date"))

        entries = container.daily_log_service.load_sheet(g.user, branch_id=branch_id, log_date=log_date)
        if request.args.get("fill") == "present":
            entries = DailyLogService.mark_all_present(entries)

        return jsonify(
            {
                "branch_id": branch_id,
                "log_date": log_date.isoformat(),
                "entries": [_entry_json(e) for e in entries],
                "status_counts": DailyLogService.status_counts(entries),
            }
        )

    @app.route("/api/daily", methods=["POST"], endpoint="save_daily_sheet")
    @api_endpoint(container)
    def save_daily_sheet():
        payload = request.get_json(silent=True) or {}
        branch_id = str(payload.get("branch_id") or "").strip()
        if not branch_id:
            raise ValidationError("branch_id is required")
        entries = payload.get("entries")
        if not isinstance(entries, list) or not entries:
            raise ValidationError("entries must be a non-empty list")

        saved = container.daily_log_service.save_sheet(
            g.user,
            branch_id=branch_id,
            log_date=_parse_date(payload.get("log_date")),
            entries=entries,
        )
        return jsonify({"success": True, "saved": saved})
