"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_API_BASE_URL = "http://127.0.0.1:8000/api"
DEFAULT_REQUEST_TIMEOUT = 30.0

DATE_KEY_FORMAT = "%Y-%m-%d"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
WEEKDAY_HEADERS = ("S", "M", "T", "W", "T", "F", "S")
# Indexed by date.weekday() (Monday = 0).
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

LEAVE_TYPES = ("Annual Leave", "Sick Leave", "Casual Leave")
MIN_LEAVE_REASON_LENGTH = 10
MIN_PASSWORD_LENGTH = 6
