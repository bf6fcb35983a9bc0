from __future__ import annotations

import csv
import io

from flask import Flask, g, jsonify, request, send_file

from ..container import Container
from ..core.constants import DEFAULT_PERIOD_NAME
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.service import filter_rows
from ..payslips.renderer import render_pdf
from ..users.controller import api_endpoint
from .model import PayrollPeriod
from .service import parse_adjustments

_BRANCH_CSV_FIELDS = [
    "branch",
    "employees",
    "gross",
    "net",
    "napsa",
    "nhima",
    "paye",
    "shortages",
    "advances",
    "fines",
    "extra_shifts",
]


def _period_json(p: PayrollPeriod) -> dict:
    return {
        "period_id": p.period_id,
        "period_name": p.period_name,
        "start_date": p.start_date.isoformat(),
        "end_date": p.end_date.isoformat(),
        "is_finalized": p.is_finalized,
    }


def register(app: Flask, container: Container) -> None:
    def _period_name() -> str:
        return (request.args.get("period") or DEFAULT_PERIOD_NAME).strip()

    def _write_branch_csv(*, rows, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=_BRANCH_CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _pdf(data: bytes, filename: str):
        return send_file(io.BytesIO(data), mimetype="application/pdf", as_attachment=True, download_name=filename)

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @api_endpoint(container)
    def dashboard():
        period_name = _period_name()
        rows = container.payroll_service.payroll_rows(period_name, visible_to=g.user)
        summaries, total = container.payroll_service.branch_summary(period_name, visible_to=g.user)
        return jsonify(
            {
                "period_name": period_name,
                "employees": len(rows),
                "branches": len(summaries),
                "totals": total.as_dict(),
                "needs_review": [row.as_dict() for row in rows if row.record.needs_review],
                "top_branches": [s.as_dict() for s in summaries[:5]],
            }
        )

    @app.route("/api/branches", methods=["GET"], endpoint="branches")
    @api_endpoint(container)
    def branches():
        summaries, total = container.payroll_service.branch_summary(_period_name(), visible_to=g.user)
        return jsonify({"branches": [s.as_dict() for s in summaries], "totals": total.as_dict()})

    @app.route("/api/branches.csv", methods=["GET"], endpoint="branches_csv")
    @api_endpoint(container)
    def branches_csv():
        period_name = _period_name()
        summaries, total = container.payroll_service.branch_summary(period_name, visible_to=g.user)
        rows = [s.as_dict() for s in summaries] + [{"branch": "TOTAL", **total.as_dict()}]
        filename = f"branch_summary_{period_name.replace(' ', '_')}.csv"
        return _write_branch_csv(rows=rows, filename=filename)

    @app.route("/api/employees", methods=["GET"], endpoint="employees")
    @api_endpoint(container)
    def employees():
        rows = container.payroll_service.payroll_rows(_period_name(), visible_to=g.user)
        rows = filter_rows(
            rows,
            branch=request.args.get("branch") or None,
            search=request.args.get("search", ""),
            sort_col=request.args.get("sort", "full_name"),
            sort_dir=request.args.get("dir", "asc"),
        )
        return jsonify({"employees": [row.as_dict() for row in rows], "count": len(rows)})

    @app.route("/api/payroll/periods", methods=["GET"], endpoint="payroll_periods")
    @api_endpoint(container, super_admin=True)
    def payroll_periods():
        return jsonify({"periods": [_period_json(p) for p in container.payroll_service.list_periods()]})

    @app.route("/api/payroll/<period_id>/preview", methods=["GET"], endpoint="payroll_preview")
    @api_endpoint(container, super_admin=True)
    def payroll_preview(period_id: str):
        preview = container.payroll_service.preview(period_id)
        return jsonify(
            {
                "period": _period_json(preview.period),
                "rows": [row.as_dict() for row in preview.rows],
                "no_logs_count": preview.no_logs_count,
                "employees_to_pay": preview.employees_to_pay,
                "totals": preview.totals,
            }
        )

    @app.route("/api/payroll/<period_id>/generate", methods=["POST"], endpoint="payroll_generate")
    @api_endpoint(container, super_admin=True)
    def payroll_generate(period_id: str):
        payload = request.get_json(silent=True) or {}
        raw_adjustments = payload.get("adjustments") or {}
        if not isinstance(raw_adjustments, dict):
            raise ValidationError("adjustments must be an object keyed by employee id")

        result = container.payroll_service.generate(
            period_id,
            confirm_rules=bool(payload.get("confirm_rules", False)),
            adjustments=parse_adjustments(raw_adjustments),
        )
        return jsonify(
            {
                "success": True,
                "period": _period_json(result.period),
                "records": [row.as_dict() for row in result.rows],
                "totals": result.totals,
                "needs_review": [row.record.employee_id for row in result.needs_review],
            }
        )

    @app.route(
        "/api/payroll/<period_id>/payslips/<employee_id>.pdf",
        methods=["GET"],
        endpoint="payslip_pdf",
    )
    @api_endpoint(container, super_admin=True)
    def payslip_pdf(period_id: str, employee_id: str):
        doc = container.payroll_service.payslip(period_id, employee_id)
        return _pdf(render_pdf([doc], title=doc.filename), doc.filename)

    @app.route("/api/payroll/<period_id>/payslips.pdf", methods=["GET"], endpoint="payslips_pdf")
    @api_endpoint(container, super_admin=True)
    def payslips_pdf(period_id: str):
        batch = container.payroll_service.payslips(period_id)
        if not batch.pages:
            raise NotFoundError("No payslips could be produced for this period")

        resp = _pdf(render_pdf(batch.pages, title=batch.filename), batch.filename)
        if batch.errors:
            resp.headers["X-Payslip-Errors"] = ",".join(err.employee_id for err in batch.errors)
        return resp
