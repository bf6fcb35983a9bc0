from __future__ import annotations

from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .model import PayslipDocument

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_html(pages: Sequence[PayslipDocument], *, title: str = "Payslips") -> str:
    """HTML with one A4 page per payslip."""
    return _env.get_template("payslip.html").render(pages=pages, title=title)


def render_pdf(pages: Sequence[PayslipDocument], *, title: str = "Payslips") -> bytes:
    # Imported lazily: WeasyPrint needs native libraries that the rest of
    # the app (and the HTML path) does not.
    from weasyprint import HTML

    return HTML(string=render_html(pages, title=title), base_url=str(TEMPLATES_DIR)).write_pdf()
