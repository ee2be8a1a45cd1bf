import os

from .config import *  # noqa: F401,F403

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
