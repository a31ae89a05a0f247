"""Settings shared by every environment module.

Values come from the process environment (a local `.env` is loaded by
`create_app`); environment modules override what differs.
"""

import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timekeeping_db"),
}

# Reference timezone for users without one in employee_configs
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "Europe/Berlin")
DEFAULT_DAILY_TARGET_MINUTES = int(os.getenv("DEFAULT_DAILY_TARGET_MINUTES", "480"))

# ArbZG thresholds, in minutes
MAX_DAILY_WORK_MINUTES = int(os.getenv("MAX_DAILY_WORK_MINUTES", "600"))
REGULAR_DAILY_WORK_MINUTES = int(os.getenv("REGULAR_DAILY_WORK_MINUTES", "480"))
BREAK_THRESHOLD_MINUTES = int(os.getenv("BREAK_THRESHOLD_MINUTES", "360"))
REQUIRED_BREAK_MINUTES = int(os.getenv("REQUIRED_BREAK_MINUTES", "30"))
EXTENDED_BREAK_THRESHOLD_MINUTES = int(os.getenv("EXTENDED_BREAK_THRESHOLD_MINUTES", "540"))
EXTENDED_REQUIRED_BREAK_MINUTES = int(os.getenv("EXTENDED_REQUIRED_BREAK_MINUTES", "45"))
MIN_QUALIFYING_BREAK_MINUTES = int(os.getenv("MIN_QUALIFYING_BREAK_MINUTES", "15"))
MIN_REST_MINUTES = int(os.getenv("MIN_REST_MINUTES", "660"))

USER_LOCK_TIMEOUT_SECONDS = int(os.getenv("USER_LOCK_TIMEOUT_SECONDS", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))
