"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WORK_DATE_FORMAT = "%Y-%m-%d"
CLOCK_FORMAT = "%H:%M"
MONTH_FORMAT = "%Y-%m"

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * 60

DEFAULT_RATE_EUROS = 10
DEFAULT_RATE_CENTS = 0
MAX_CENTS = 99

ADMIN_TOKEN_TTL_MINUTES = 15

DEFAULT_PASSWORD_PREFIX = "defaultPass"
DEFAULT_PASSWORD_SUFFIX_LEN = 5

MAX_PHOTO_BYTES = 5 * 1024 * 1024

UNKNOWN_USER_NAME = "Unknown User"
ALL_EMPLOYEES = "all"
