"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

USERS = "users"
ATTENDANCE_SESSIONS = "attendance_sessions"
ATTENDANCE_RECORDS = "attendance_records"
CLASS_SCHEDULES = "class_schedules"
CREDENTIALS = "credentials"

SESSION_CODE_MIN = 100000
SESSION_CODE_MAX = 999999
SESSION_CODE_LENGTH = 6
DEFAULT_SESSION_CODE_ATTEMPTS = 10

# Managed document stores cap the number of values in an "in" predicate.
DEFAULT_IN_QUERY_CHUNK_SIZE = 30

DISPLAY_DATETIME_FORMAT = "%b %d, %Y %H:%M"
TIME_OF_DAY_FORMAT = "%H:%M"
