"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_DAILY_TARGET_MINUTES = 480
DEFAULT_TIMEZONE = "UTC"
MAX_TIMESHEET_DAYS = 366
RECENT_ENTRIES_LIMIT = 50

ADMIN_PERMISSION = "admin.users.manage"

# Working-time regulation defaults (ArbZG)
MAX_DAILY_WORK_MINUTES = 600
REGULAR_DAILY_WORK_MINUTES = 480
BREAK_THRESHOLD_MINUTES = 360
REQUIRED_BREAK_MINUTES = 30
EXTENDED_BREAK_THRESHOLD_MINUTES = 540
EXTENDED_REQUIRED_BREAK_MINUTES = 45
MIN_QUALIFYING_BREAK_MINUTES = 15
MIN_REST_MINUTES = 660
