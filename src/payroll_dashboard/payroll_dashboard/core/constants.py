"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PERIOD_NAME = "January 2026"
DEFAULT_LOG_EDIT_WINDOW_DAYS = 3

UNKNOWN_NAME = "Unknown"
UNKNOWN_POSITION = "unknown"

COMMENT_FROM_LOGS = "Generated from daily logs"
COMMENT_NO_LOGS = "No daily logs recorded"
SYSTEM_COMMENTS = frozenset({COMMENT_FROM_LOGS, COMMENT_NO_LOGS})

# Lookups by id are chunked to keep IN (...) lists short.
ID_BATCH_SIZE = 40

DEFAULT_LEAVE_ENTITLEMENTS = {
    "annual_days_per_month": 2,
    "sick_days": 10,
    "compassionate_days": 5,
}
