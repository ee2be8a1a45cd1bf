import os

from .config import *  # noqa: F401,F403

DEBUG = False
TESTING = True

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_attendance_test"),
}

AUTO_INIT_DB = False
PARSE_WORKERS = 2
