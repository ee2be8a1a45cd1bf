"""Cell-level parsing for biometric spreadsheet values.

pandas hands cells over as str, int/float, datetime/Timestamp, date, time or
NaN/NaT depending on the vendor and the Excel engine; every helper here accepts
all of them.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any, Optional

import pandas as pd

# Excel's day zero (it counts the non-existent 1900-02-29).
_EXCEL_ORIGIN = pd.Timestamp("1899-12-30")
_MAX_EXCEL_SERIAL = 2958465


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def parse_code(value: Any) -> Optional[str]:
    """Employee codes read as floats (101.0) are turned back into '101'."""
    if is_blank(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip() or None


def parse_name(value: Any) -> Optional[str]:
    if is_blank(value):
        return None
    return str(value).strip()


def parse_time(value: Any) -> time:
    """Parse a punch time and truncate it to the minute.

    Accepts time/datetime objects, Excel day fractions (0.4375 == 10:30) and
    any clock string pandas understands ('10:15', '7:05:59', '09:30 AM').
    Raises ValueError otherwise.
    """

    if isinstance(value, datetime):
        return time(value.hour, value.minute)
    if isinstance(value, time):
        return time(value.hour, value.minute)
    if isinstance(value, timedelta):
        return _time_from_delta(pd.Timedelta(value))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _time_from_fraction(float(value))

    text = str(value).strip()
    try:
        return _time_from_fraction(float(text))
    except ValueError:
        pass

    stamp = pd.to_datetime(text.replace("a.m.", "am").replace("p.m.", "pm"), errors="coerce")
    if pd.isna(stamp):
        raise ValueError(f"Invalid time: {text!r}")
    return time(stamp.hour, stamp.minute)


def parse_date(value: Any, *, dayfirst: bool = False) -> tuple[date, Optional[time]]:
    """Parse a date cell, returning the time part too when the cell carries one.

    Slash/dash dates are ambiguous; ``dayfirst`` picks the first interpretation
    tried and the other one is used when the first is not a valid date.
    """

    if isinstance(value, datetime):
        return _split(pd.Timestamp(value))
    if isinstance(value, date):
        return value, None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _date_from_serial(float(value))

    text = str(value).strip()
    try:
        return _date_from_serial(float(text))
    except ValueError:
        pass

    stamp = pd.to_datetime(text, dayfirst=dayfirst, errors="coerce")
    if pd.isna(stamp):
        stamp = pd.to_datetime(text, dayfirst=not dayfirst, errors="coerce")
    if pd.isna(stamp):
        raise ValueError(f"Invalid date: {text!r}")
    return _split(stamp)


def _split(stamp: pd.Timestamp) -> tuple[date, Optional[time]]:
    clock = time(stamp.hour, stamp.minute)
    return stamp.date(), (clock if clock != time(0, 0) else None)


def _time_from_fraction(fraction: float) -> time:
    if not 0 <= fraction < 1:
        raise ValueError(f"Invalid time fraction: {fraction!r}")
    return _time_from_delta(pd.to_timedelta(fraction, unit="D"))


def _time_from_delta(delta: pd.Timedelta) -> time:
    # Day fractions carry float noise (10:15 reads back as 10:14:59.99...).
    seconds = int(delta.round("s").total_seconds()) % 86400
    return time(seconds // 3600, (seconds % 3600) // 60)


def _date_from_serial(serial: float) -> tuple[date, Optional[time]]:
    # Anything before 1900 is not a plausible punch date.
    if not 1 <= serial <= _MAX_EXCEL_SERIAL:
        raise ValueError(f"Invalid date serial: {serial!r}")
    stamp = _EXCEL_ORIGIN + pd.to_timedelta(serial, unit="D").round("s")
    return _split(stamp)
