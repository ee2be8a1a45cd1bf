from datetime import date, time

import pytest

from hr_attendance.attendance.model import DailyAttendanceRecord
from hr_attendance.core.enums import AttendanceStatus, FingerprintMissType, LeaveType
from hr_attendance.core.exceptions import NotFoundError, ValidationError
from hr_attendance.employees.model import Employee
from hr_attendance.leaves.model import ApprovedLeaveInterval
from hr_attendance.reporting.model import minutes_to_hours
from hr_attendance.reporting.service import summarize


def _rec(employee_id, day, status, **kw):
    return DailyAttendanceRecord(
        employee_id=employee_id,
        work_date=day,
        clock_in=kw.pop("clock_in", None),
        clock_out=kw.pop("clock_out", None),
        status=status,
        **kw,
    )


@pytest.fixture
def january(attendance_repo, employees_repo, leaves_repo):
    employees_repo.employees.append(Employee(employee_id=3, full_name="Aaron Zed", department="Sales", employee_code="103"))
    leaves_repo.intervals.append(
        ApprovedLeaveInterval(
            leave_id=11,
            employee_id=2,
            leave_type=LeaveType.VACATION,
            start_date=date(2025, 1, 8),
            end_date=date(2025, 1, 8),
        )
    )
    attendance_repo.replace_many(
        [
            # Alice
            _rec(1, date(2025, 1, 7), AttendanceStatus.LATE, clock_in=time(10, 30), clock_out=time(20, 0),
                 minutes_late=30, minutes_overtime=60),
            _rec(1, date(2025, 1, 6), AttendanceStatus.PRESENT, clock_in=time(10, 0),
                 missed_clock_out=True, fingerprint_miss_type=FingerprintMissType.CLOCK_OUT, fingerprint_deduction=0.25),
            _rec(1, date(2025, 1, 8), AttendanceStatus.ABSENT, missed_clock_in=True, missed_clock_out=True,
                 fingerprint_miss_type=FingerprintMissType.BOTH),
            # Bob
            _rec(2, date(2025, 1, 6), AttendanceStatus.PRESENT, clock_in=time(9, 50), clock_out=time(19, 30),
                 minutes_overtime=30),
            _rec(2, date(2025, 1, 7), AttendanceStatus.WFH, related_form=12),
            _rec(2, date(2025, 1, 8), AttendanceStatus.ON_LEAVE, related_form=11),
            _rec(2, date(2025, 1, 9), AttendanceStatus.PRESENT, clock_out=time(19, 0), missed_clock_in=True,
                 fingerprint_miss_type=FingerprintMissType.CLOCK_IN, fingerprint_deduction=0.25),
            # Aaron
            _rec(3, date(2025, 1, 6), AttendanceStatus.EXCUSED, related_form=13),
            # Other month
            _rec(1, date(2025, 2, 3), AttendanceStatus.PRESENT, clock_in=time(10, 0), clock_out=time(19, 0)),
        ]
    )
    return attendance_repo


def test_stats_per_employee(container, january):
    report = container.report_service.build_monthly_report("2025-01")
    by_name = {e.user["name"]: e for e in report.report}

    alice = by_name["Alice Adams"].stats
    assert (alice.total_days, alice.present, alice.late, alice.absent) == (3, 1, 1, 1)
    assert alice.unexcused_absences == 1
    assert alice.total_minutes_late == 30
    assert alice.total_minutes_overtime == 60
    assert alice.fingerprint_misses == 2
    assert alice.total_fingerprint_deduction == 0.25
    assert (alice.missed_clock_ins, alice.missed_clock_outs) == (1, 2)

    bob = by_name["Bob Brown"].stats
    assert (bob.present, bob.wfh, bob.on_leave, bob.unexcused_absences) == (2, 1, 1, 0)
    assert bob.total_fingerprint_deduction == 0.25

    assert by_name["Aaron Zed"].stats.excused == 1


def test_records_are_date_ordered_and_deduction_is_their_sum(container, january):
    report = container.report_service.build_monthly_report("2025-01")

    for entry in report.report:
        days = [r.work_date for r in entry.records]
        assert days == sorted(days)
        assert entry.stats.total_fingerprint_deduction == sum(r.fingerprint_deduction for r in entry.records)
        assert entry.stats.total_fingerprint_deduction >= 0


def test_report_shape_and_ordering(container, january):
    data = container.report_service.build_monthly_report("2025-01").to_dict()

    assert data["month"] == "2025-01"
    assert data["totalEmployees"] == 3
    assert [e["user"]["name"] for e in data["report"]] == ["Aaron Zed", "Alice Adams", "Bob Brown"]
    assert data["report"][1]["records"][0] == {
        "date": "2025-01-06",
        "clockIn": "10:00",
        "clockOut": None,
        "status": "present",
        "minutesLate": 0,
        "minutesOvertime": 0,
        "missedClockIn": False,
        "missedClockOut": True,
        "fingerprintMissType": "clock_out",
        "fingerprintDeduction": 0.25,
        "relatedForm": None,
        "employeeCode": None,
        "location": None,
    }
    assert [r["id"] for r in data["approvedRequests"]] == [11]


def test_overtime_summary(container, january):
    summary = container.report_service.build_monthly_report("2025-01").overtime_summary.to_dict()

    assert summary["totalOvertimeMinutes"] == 90
    assert summary["totalOvertimeHours"] == 1.5
    assert summary["employeesWithOvertime"] == [
        {"name": "Alice Adams", "department": "Engineering", "overtimeMinutes": 60, "overtimeHours": 1.0},
        {"name": "Bob Brown", "department": "Operations", "overtimeMinutes": 30, "overtimeHours": 0.5},
    ]


def test_monthly_report_is_idempotent(container, january):
    first = container.report_service.build_monthly_report("2025-01")
    second = container.report_service.build_monthly_report("2025-01")

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_summarize_ignores_input_order():
    records = [
        _rec(1, date(2025, 1, 7), AttendanceStatus.PRESENT, fingerprint_deduction=0.25),
        _rec(1, date(2025, 1, 6), AttendanceStatus.LATE, minutes_late=20),
    ]

    assert summarize(records) == summarize(list(reversed(records)))


def test_empty_month(container):
    data = container.report_service.build_monthly_report("2025-03").to_dict()

    assert data["totalEmployees"] == 0
    assert data["report"] == []
    assert data["overtimeSummary"] == {"totalOvertimeMinutes": 0, "totalOvertimeHours": 0.0, "employeesWithOvertime": []}


def test_employee_detail(container, january):
    detail = container.report_service.build_employee_detail(2, "2025-01").to_dict()

    assert detail["user"] == {"id": 2, "name": "Bob Brown", "department": "Operations", "employeeCode": "102"}
    assert detail["month"] == "2025-01"
    assert detail["stats"]["totalDays"] == 4
    assert [r["date"] for r in detail["records"]] == ["2025-01-06", "2025-01-07", "2025-01-08", "2025-01-09"]
    assert [r["type"] for r in detail["approvedRequests"]] == ["vacation"]


def test_employee_detail_unknown_employee(container):
    with pytest.raises(NotFoundError):
        container.report_service.build_employee_detail(404, "2025-01")


def test_invalid_month_is_rejected(container):
    with pytest.raises(ValidationError):
        container.report_service.build_monthly_report("January")


def test_available_months_newest_first(container, january):
    assert container.report_service.available_months() == ["2025-02", "2025-01"]


@pytest.mark.parametrize("minutes, hours", [(0, 0.0), (15, 0.3), (45, 0.8), (90, 1.5), (100, 1.7), (3, 0.1), (2, 0.0)])
def test_overtime_hours_round_halves_up(minutes, hours):
    assert minutes_to_hours(minutes) == hours
