"""Settings shared by every environment.

Environment modules star-import this one and override what differs.
Weekdays follow ``date.weekday()`` (Monday=0); Friday and Saturday are the
default weekend.
"""

import os


def _env_list(name: str, default: str = "") -> list[str]:
    raw = os.environ.get(name, default)
    return [p.strip() for p in raw.split(",") if p.strip()]


DB_CONFIG = {
    "host": os.environ.get("DB_HOST", "localhost"),
    "port": int(os.environ.get("DB_PORT", "3306")),
    "user": os.environ.get("DB_USER", "root"),
    "password": os.environ.get("DB_PASSWORD", ""),
    "database": os.environ.get("DB_NAME", "hr_attendance"),
}

DEBUG = bool(int(os.environ.get("DEBUG", "0")))
AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = os.environ.get("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")

# Upload
MAX_UPLOAD_FILES = int(os.environ.get("MAX_UPLOAD_FILES", "10"))
PARSE_WORKERS = int(os.environ.get("PARSE_WORKERS", "4"))
DATE_DAYFIRST = bool(int(os.environ.get("DATE_DAYFIRST", "0")))

# HR policy
LATE_GRACE_MINUTES = int(os.environ.get("LATE_GRACE_MINUTES", "10"))
FINGERPRINT_DEDUCTION_CLOCK_IN = float(os.environ.get("FINGERPRINT_DEDUCTION_CLOCK_IN", "0.25"))
FINGERPRINT_DEDUCTION_CLOCK_OUT = float(os.environ.get("FINGERPRINT_DEDUCTION_CLOCK_OUT", "0.25"))
DEFAULT_WORK_START = os.environ.get("DEFAULT_WORK_START", "10:00")
DEFAULT_WORK_END = os.environ.get("DEFAULT_WORK_END", "19:00")

# Calendar
WEEKEND_DAYS = [int(d) for d in _env_list("WEEKEND_DAYS", "4,5")]
HOLIDAYS = _env_list("HOLIDAYS")
