from __future__ import annotations

import calendar
from datetime import date, datetime, time

from ..core.constants import MONTH_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def month_of(value: date) -> str:
    """YYYY-MM key used to group records by calendar month."""
    return value.strftime(MONTH_FORMAT)


def month_bounds(month: str) -> tuple[date, date]:
    """First and last calendar day of a YYYY-MM month."""
    start = datetime.strptime(month, MONTH_FORMAT).date()
    last_day = calendar.monthrange(start.year, start.month)[1]
    return start, start.replace(day=last_day)


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def minutes_after(actual: time, reference: time) -> int:
    """Whole minutes ``actual`` falls after ``reference``; 0 when not after."""
    return max(0, minutes_of_day(actual) - minutes_of_day(reference))


def format_time(value: time | None) -> str | None:
    return value.strftime("%H:%M") if value else None
