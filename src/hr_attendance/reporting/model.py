from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from ..attendance.model import DailyAttendanceRecord
from ..common.datetime_utils import format_time
from ..employees.model import Employee
from ..leaves.model import ApprovedLeaveInterval


def minutes_to_hours(minutes: int) -> float:
    """Hours to one decimal, halves rounded up (15 min == 0.3 h)."""
    return float((Decimal(minutes) / Decimal(60)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class AttendanceStats:
    total_days: int = 0
    present: int = 0
    late: int = 0
    absent: int = 0
    unexcused_absences: int = 0
    on_leave: int = 0
    wfh: int = 0
    excused: int = 0
    fingerprint_misses: int = 0
    total_fingerprint_deduction: float = 0.0
    total_minutes_late: int = 0
    total_minutes_overtime: int = 0
    missed_clock_ins: int = 0
    missed_clock_outs: int = 0

    def to_dict(self) -> dict:
        return {
            "totalDays": self.total_days,
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
            "unexcusedAbsences": self.unexcused_absences,
            "onLeave": self.on_leave,
            "wfh": self.wfh,
            "excused": self.excused,
            "fingerprintMisses": self.fingerprint_misses,
            "totalFingerprintDeduction": self.total_fingerprint_deduction,
            "totalMinutesLate": self.total_minutes_late,
            "totalMinutesOvertime": self.total_minutes_overtime,
            "missedClockIns": self.missed_clock_ins,
            "missedClockOuts": self.missed_clock_outs,
        }


@dataclass(frozen=True)
class OvertimeEntry:
    name: str
    department: Optional[str]
    overtime_minutes: int

    @property
    def overtime_hours(self) -> float:
        return minutes_to_hours(self.overtime_minutes)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "department": self.department,
            "overtimeMinutes": self.overtime_minutes,
            "overtimeHours": self.overtime_hours,
        }


@dataclass(frozen=True)
class OvertimeSummary:
    total_overtime_minutes: int = 0
    employees_with_overtime: tuple[OvertimeEntry, ...] = ()

    @property
    def total_overtime_hours(self) -> float:
        return minutes_to_hours(self.total_overtime_minutes)

    def to_dict(self) -> dict:
        return {
            "totalOvertimeMinutes": self.total_overtime_minutes,
            "totalOvertimeHours": self.total_overtime_hours,
            "employeesWithOvertime": [e.to_dict() for e in self.employees_with_overtime],
        }


@dataclass(frozen=True)
class EmployeeReport:
    user: dict[str, Any]
    stats: AttendanceStats
    records: tuple[DailyAttendanceRecord, ...]

    def to_dict(self) -> dict:
        return {
            "user": dict(self.user),
            "stats": self.stats.to_dict(),
            "records": [record_to_dict(r) for r in self.records],
        }


@dataclass(frozen=True)
class MonthlyReport:
    month: str
    report: tuple[EmployeeReport, ...] = ()
    overtime_summary: OvertimeSummary = field(default_factory=OvertimeSummary)
    approved_requests: tuple[ApprovedLeaveInterval, ...] = ()

    @property
    def total_employees(self) -> int:
        return len(self.report)

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "totalEmployees": self.total_employees,
            "report": [e.to_dict() for e in self.report],
            "overtimeSummary": self.overtime_summary.to_dict(),
            "approvedRequests": [leave_to_dict(i) for i in self.approved_requests],
        }


@dataclass(frozen=True)
class EmployeeDetail:
    user: dict[str, Any]
    month: str
    stats: AttendanceStats
    records: tuple[DailyAttendanceRecord, ...] = ()
    approved_requests: tuple[ApprovedLeaveInterval, ...] = ()

    def to_dict(self) -> dict:
        return {
            "user": dict(self.user),
            "month": self.month,
            "stats": self.stats.to_dict(),
            "records": [record_to_dict(r) for r in self.records],
            "approvedRequests": [leave_to_dict(i) for i in self.approved_requests],
        }


def user_to_dict(employee: Employee) -> dict:
    return {
        "id": employee.employee_id,
        "name": employee.full_name,
        "department": employee.department,
        "employeeCode": employee.employee_code,
    }


def record_to_dict(r: DailyAttendanceRecord) -> dict:
    return {
        "date": r.work_date.isoformat(),
        "clockIn": format_time(r.clock_in),
        "clockOut": format_time(r.clock_out),
        "status": r.status.value,
        "minutesLate": r.minutes_late,
        "minutesOvertime": r.minutes_overtime,
        "missedClockIn": r.missed_clock_in,
        "missedClockOut": r.missed_clock_out,
        "fingerprintMissType": r.fingerprint_miss_type.value,
        "fingerprintDeduction": r.fingerprint_deduction,
        "relatedForm": r.related_form,
        "employeeCode": r.employee_code,
        "location": r.source_file,
    }


def leave_to_dict(i: ApprovedLeaveInterval) -> dict:
    return {
        "id": i.leave_id,
        "employeeId": i.employee_id,
        "type": i.leave_type.value,
        "startDate": i.start_date.isoformat(),
        "endDate": i.end_date.isoformat(),
        "metadata": dict(i.metadata),
    }
