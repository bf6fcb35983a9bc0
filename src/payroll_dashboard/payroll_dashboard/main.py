from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_roles, list_tables
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll
from .users.controller import error_response, register as register_users

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_roles(db_config)
        app.logger.info("demo seed ready")

    container = build_container(
        db_config=db_config,
        payroll_rules=getattr(settings, "PAYROLL_RULES"),
        company_name=getattr(settings, "COMPANY_NAME", "BwanaBet"),
        edit_window_days=int(getattr(settings, "DAILY_LOG_EDIT_WINDOW_DAYS", 3)),
        leave_entitlements=getattr(settings, "LEAVE_ENTITLEMENTS"),
    )
    app.extensions["payroll_container"] = container

    register_users(app, container)
    register_attendance(app, container)
    register_employees(app, container)
    register_payroll(app, container)

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    return app
