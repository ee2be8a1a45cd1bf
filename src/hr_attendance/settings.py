from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Mapping, Optional, Sequence

from .common.datetime_utils import parse_iso_date
from .core import constants


def _as_time(value: Any, default: time) -> time:
    if value is None or value == "":
        return default
    if isinstance(value, time):
        return value
    hours, minutes = str(value).strip().split(":")[:2]
    return time(int(hours), int(minutes))


def _as_date(value: Any) -> date:
    return value if isinstance(value, date) else parse_iso_date(str(value).strip())


@dataclass(frozen=True)
class EngineSettings:
    """Engine knobs read from a ``config.<env>`` settings module."""

    db_config: dict = field(default_factory=dict)
    debug: bool = False
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    auto_init_db: bool = False
    max_upload_files: int = constants.DEFAULT_MAX_UPLOAD_FILES
    parse_workers: int = constants.DEFAULT_PARSE_WORKERS
    late_grace_minutes: int = constants.DEFAULT_LATE_GRACE_MINUTES
    fingerprint_deduction_clock_in: float = constants.DEFAULT_FINGERPRINT_DEDUCTION_CLOCK_IN
    fingerprint_deduction_clock_out: float = constants.DEFAULT_FINGERPRINT_DEDUCTION_CLOCK_OUT
    weekend_days: tuple[int, ...] = constants.DEFAULT_WEEKEND_DAYS
    holidays: tuple[date, ...] = ()
    date_dayfirst: bool = False
    default_work_start: time = constants.DEFAULT_WORK_START
    default_work_end: time = constants.DEFAULT_WORK_END
    header_aliases: Optional[Mapping[str, Sequence[str]]] = None

    @classmethod
    def from_module(cls, settings: Any) -> "EngineSettings":
        def get(name: str, default: Any = None) -> Any:
            return getattr(settings, name, default)

        return cls(
            db_config=dict(get("DB_CONFIG", {}) or {}),
            debug=bool(get("DEBUG", False)),
            log_level=str(get("LOG_LEVEL", cls.log_level)).upper(),
            log_format=str(get("LOG_FORMAT", cls.log_format)),
            auto_init_db=bool(get("AUTO_INIT_DB", False)),
            max_upload_files=int(get("MAX_UPLOAD_FILES", constants.DEFAULT_MAX_UPLOAD_FILES)),
            parse_workers=int(get("PARSE_WORKERS", constants.DEFAULT_PARSE_WORKERS)),
            late_grace_minutes=int(get("LATE_GRACE_MINUTES", constants.DEFAULT_LATE_GRACE_MINUTES)),
            fingerprint_deduction_clock_in=float(
                get("FINGERPRINT_DEDUCTION_CLOCK_IN", constants.DEFAULT_FINGERPRINT_DEDUCTION_CLOCK_IN)
            ),
            fingerprint_deduction_clock_out=float(
                get("FINGERPRINT_DEDUCTION_CLOCK_OUT", constants.DEFAULT_FINGERPRINT_DEDUCTION_CLOCK_OUT)
            ),
            weekend_days=tuple(int(d) for d in get("WEEKEND_DAYS", constants.DEFAULT_WEEKEND_DAYS)),
            holidays=tuple(_as_date(d) for d in (get("HOLIDAYS", ()) or ())),
            date_dayfirst=bool(get("DATE_DAYFIRST", False)),
            default_work_start=_as_time(get("DEFAULT_WORK_START"), constants.DEFAULT_WORK_START),
            default_work_end=_as_time(get("DEFAULT_WORK_END"), constants.DEFAULT_WORK_END),
            header_aliases=get("HEADER_ALIASES"),
        )

    def logging_config(self) -> dict:
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": self.log_format}},
            "handlers": {"console": {"class": "logging.StreamHandler", "formatter": "default"}},
            # Package records propagate to the root handler; third-party noise stays at WARNING.
            "loggers": {"hr_attendance": {"level": self.log_level}},
            "root": {"handlers": ["console"], "level": "WARNING"},
        }
