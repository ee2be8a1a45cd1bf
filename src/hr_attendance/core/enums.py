from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Canonical daily attendance status stored per (employee, date)."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    EXCUSED = "excused"
    ON_LEAVE = "on_leave"
    WFH = "wfh"


class FingerprintMissType(str, Enum):
    """Which expected punch is missing for the day."""

    NONE = "none"
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    BOTH = "both"


class LeaveType(str, Enum):
    """Approved form types the engine reconciles against."""

    VACATION = "vacation"
    EXCUSE = "excuse"
    SICK_LEAVE = "sick_leave"
    WFH = "wfh"
