import os

from .payroll import leave_entitlements_from_env, payroll_rules_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

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
DAILY_LOG_EDIT_WINDOW_DAYS = int(os.getenv("DAILY_LOG_EDIT_WINDOW_DAYS", "3"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
