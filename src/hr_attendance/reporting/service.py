from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence

from ..attendance.model import DailyAttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.validators import require_month
from ..core.enums import AttendanceStatus, FingerprintMissType
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..leaves.reconciliation import LeaveReconciliationService
from .model import (
    AttendanceStats,
    EmployeeDetail,
    EmployeeReport,
    MonthlyReport,
    OvertimeEntry,
    OvertimeSummary,
    user_to_dict,
)


def summarize(records: Iterable[DailyAttendanceRecord]) -> AttendanceStats:
    """Count and sum one employee's records. Pure; order-independent."""

    ordered = sorted(records, key=lambda r: r.work_date)
    by_status = defaultdict(int)
    for r in ordered:
        by_status[r.status] += 1

    return AttendanceStats(
        total_days=len(ordered),
        present=by_status[AttendanceStatus.PRESENT],
        late=by_status[AttendanceStatus.LATE],
        absent=by_status[AttendanceStatus.ABSENT],
        unexcused_absences=by_status[AttendanceStatus.ABSENT],
        on_leave=by_status[AttendanceStatus.ON_LEAVE],
        wfh=by_status[AttendanceStatus.WFH],
        excused=by_status[AttendanceStatus.EXCUSED],
        fingerprint_misses=sum(1 for r in ordered if r.fingerprint_miss_type != FingerprintMissType.NONE),
        total_fingerprint_deduction=sum(r.fingerprint_deduction for r in ordered),
        total_minutes_late=sum(r.minutes_late for r in ordered),
        total_minutes_overtime=sum(r.minutes_overtime for r in ordered),
        missed_clock_ins=sum(1 for r in ordered if r.missed_clock_in),
        missed_clock_outs=sum(1 for r in ordered if r.missed_clock_out),
    )


class MonthlyReportService:
    """Read side: monthly statistics computed on demand from stored records."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        leaves: LeaveReconciliationService,
    ):
        self._attendance = attendance
        self._employees = employees
        self._leaves = leaves

    def build_monthly_report(self, month: str) -> MonthlyReport:
        month = require_month(month)

        by_employee: dict[int, list[DailyAttendanceRecord]] = defaultdict(list)
        for r in self._attendance.list_month(month):
            by_employee[r.employee_id].append(r)

        entries = []
        for employee_id, records in by_employee.items():
            records.sort(key=lambda r: r.work_date)
            user = self._user(employee_id)
            entries.append(EmployeeReport(user=user, stats=summarize(records), records=tuple(records)))
        entries.sort(key=lambda e: ((e.user.get("name") or "").lower(), e.user["id"]))

        return MonthlyReport(
            month=month,
            report=tuple(entries),
            overtime_summary=_overtime_summary(entries),
            approved_requests=tuple(self._leaves.approved_requests(month)),
        )

    def build_employee_detail(self, employee_id: int, month: str) -> EmployeeDetail:
        month = require_month(month)
        employee = self._employees.get_by_id(int(employee_id))
        if employee is None:
            raise NotFoundError("Employee not found")

        records = sorted(self._attendance.list_month(month, employee_id=employee.employee_id), key=lambda r: r.work_date)
        return EmployeeDetail(
            user=user_to_dict(employee),
            month=month,
            stats=summarize(records),
            records=tuple(records),
            approved_requests=tuple(self._leaves.approved_requests(month, employee.employee_id)),
        )

    def available_months(self) -> Sequence[str]:
        return list(self._attendance.list_months())

    def _user(self, employee_id: int) -> dict:
        employee: Optional[Employee] = self._employees.get_by_id(employee_id)
        if employee is None:
            # Records outlive deactivated or deleted employees.
            return {"id": employee_id, "name": None, "department": None, "employeeCode": None}
        return user_to_dict(employee)


def _overtime_summary(entries: Sequence[EmployeeReport]) -> OvertimeSummary:
    with_overtime = [
        OvertimeEntry(
            name=e.user.get("name") or "",
            department=e.user.get("department"),
            overtime_minutes=e.stats.total_minutes_overtime,
        )
        for e in entries
        if e.stats.total_minutes_overtime > 0
    ]
    with_overtime.sort(key=lambda o: (-o.overtime_minutes, o.name))
    return OvertimeSummary(
        total_overtime_minutes=sum(e.stats.total_minutes_overtime for e in entries),
        employees_with_overtime=tuple(with_overtime),
    )
