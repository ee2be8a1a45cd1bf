from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional, Union

from ..common.datetime_utils import month_of
from ..core.enums import AttendanceStatus, FingerprintMissType
from ..leaves.model import ApprovedLeaveInterval


@dataclass(frozen=True)
class DailyAttendanceRecord:
    """Domain entity: the authoritative attendance of one employee on one working day.

    Replaced wholesale whenever its punches or leave evidence change; never
    patched field by field.
    """

    employee_id: int
    work_date: date
    clock_in: Optional[time]
    clock_out: Optional[time]
    status: AttendanceStatus
    minutes_late: int = 0
    minutes_overtime: int = 0
    missed_clock_in: bool = False
    missed_clock_out: bool = False
    fingerprint_miss_type: FingerprintMissType = FingerprintMissType.NONE
    fingerprint_deduction: float = 0.0
    related_form: Optional[int] = None
    employee_code: Optional[str] = None
    source_file: Optional[str] = None

    @property
    def key(self) -> tuple[int, date]:
        return (self.employee_id, self.work_date)

    @property
    def month(self) -> str:
        return month_of(self.work_date)


# Evidence for a single (employee, date): exactly one variant applies.


@dataclass(frozen=True)
class LeaveEvidence:
    interval: ApprovedLeaveInterval
    clock_in: Optional[time] = None
    clock_out: Optional[time] = None


@dataclass(frozen=True)
class ExcuseEvidence:
    interval: ApprovedLeaveInterval
    clock_in: Optional[time] = None
    clock_out: Optional[time] = None


@dataclass(frozen=True)
class WfhEvidence:
    interval: ApprovedLeaveInterval
    clock_in: Optional[time] = None
    clock_out: Optional[time] = None


@dataclass(frozen=True)
class PunchEvidence:
    clock_in: Optional[time] = None
    clock_out: Optional[time] = None


DayEvidence = Union[LeaveEvidence, ExcuseEvidence, WfhEvidence, PunchEvidence]
