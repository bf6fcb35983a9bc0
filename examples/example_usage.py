"""Example: drive the service layer without Flask.

Prints the branch summary for the default period and writes that period's
payslips to an HTML file (open it in a browser, or use render_pdf).
"""

import importlib
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module

from src.payroll_dashboard.payroll_dashboard.common.formatting import fmt
from src.payroll_dashboard.payroll_dashboard.container import build_container
from src.payroll_dashboard.payroll_dashboard.payslips.renderer import render_html


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        payroll_rules=settings.PAYROLL_RULES,
        company_name=settings.COMPANY_NAME,
        leave_entitlements=settings.LEAVE_ENTITLEMENTS,
    )

    summaries, total = container.payroll_service.branch_summary()
    for s in summaries:
        print(f"{s.branch:<20} {s.totals.employees:>3}  gross {fmt(s.totals.gross):>12}  net {fmt(s.totals.net):>12}")
    print(f"{'TOTAL':<20} {total.employees:>3}  gross {fmt(total.gross):>12}  net {fmt(total.net):>12}")

    periods = [p for p in container.payroll_service.list_periods() if not p.is_finalized]
    if periods:
        batch = container.payroll_service.payslips(periods[0].period_id)
        out = Path(batch.filename).with_suffix(".html")
        out.write_text(render_html(batch.pages, title=batch.filename), encoding="utf-8")
        print(f"Wrote {len(batch.pages)} payslips to {out} ({len(batch.errors)} failed)")


if __name__ == "__main__":
    main()
