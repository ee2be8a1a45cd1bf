"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Settings modules under ``config/`` override most of them.
"""

from datetime import time

DEFAULT_WORK_START = time(10, 0)
DEFAULT_WORK_END = time(19, 0)

DEFAULT_LATE_GRACE_MINUTES = 10
DEFAULT_FINGERPRINT_DEDUCTION_CLOCK_IN = 0.25
DEFAULT_FINGERPRINT_DEDUCTION_CLOCK_OUT = 0.25

# date.weekday(): Monday=0 ... Friday=4, Saturday=5
DEFAULT_WEEKEND_DAYS = (4, 5)

DEFAULT_MAX_UPLOAD_FILES = 10
DEFAULT_PARSE_WORKERS = 4
HEADER_SCAN_ROWS = 15

ALLOWED_UPLOAD_EXTENSIONS = (".xls", ".xlsx")
MONTH_FORMAT = "%Y-%m"
