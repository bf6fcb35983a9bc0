import os

from .payroll import leave_entitlements_from_env, payroll_rules_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_test_db"),
}

COMPANY_NAME = "BwanaBet"

PAYROLL_RULES = payroll_rules_from_env()
LEAVE_ENTITLEMENTS = leave_entitlements_from_env()
DAILY_LOG_EDIT_WINDOW_DAYS = 3

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
