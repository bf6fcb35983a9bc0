import os

from .payroll import leave_entitlements_from_env, payroll_rules_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_db"),
}

COMPANY_NAME = os.getenv("COMPANY_NAME", "BwanaBet")

PAYROLL_RULES = payroll_rules_from_env()
LEAVE_ENTITLEMENTS = leave_entitlements_from_env()

# Branch managers may edit logs this many days back; super admins any date.
DAILY_LOG_EDIT_WINDOW_DAYS = int(os.getenv("DAILY_LOG_EDIT_WINDOW_DAYS", "3"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
