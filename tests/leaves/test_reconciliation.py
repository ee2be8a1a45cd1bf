import logging
from datetime import date

from hr_attendance.core.enums import LeaveType
from hr_attendance.leaves.model import ApprovedLeaveInterval
from hr_attendance.leaves.reconciliation import LeaveReconciliationService, build_leave_index


def _form(leave_id, leave_type, start, end, employee_id=1):
    return ApprovedLeaveInterval(
        leave_id=leave_id, employee_id=employee_id, leave_type=leave_type, start_date=start, end_date=end
    )


def test_index_is_clipped_to_the_month():
    spanning = _form(1, LeaveType.VACATION, date(2024, 12, 30), date(2025, 1, 2))

    index = build_leave_index("2025-01", [spanning])

    assert sorted(day for _, day in index.by_day) == [date(2025, 1, 1), date(2025, 1, 2)]
    assert index.lookup(1, date(2025, 1, 2)) == spanning
    assert index.lookup(1, date(2025, 1, 3)) is None
    assert index.lookup(2, date(2025, 1, 1)) is None


def test_intervals_outside_the_month_are_ignored():
    index = build_leave_index("2025-01", [_form(1, LeaveType.WFH, date(2025, 2, 1), date(2025, 2, 3))])

    assert index.intervals == ()
    assert index.by_day == {}


def test_leave_beats_wfh_even_when_wfh_starts_first(caplog):
    wfh = _form(1, LeaveType.WFH, date(2025, 1, 6), date(2025, 1, 10))
    vacation = _form(2, LeaveType.VACATION, date(2025, 1, 8), date(2025, 1, 8))

    with caplog.at_level(logging.WARNING, logger="hr_attendance.leaves.reconciliation"):
        index = build_leave_index("2025-01", [wfh, vacation])

    assert index.lookup(1, date(2025, 1, 8)) == vacation
    assert index.lookup(1, date(2025, 1, 7)) == wfh
    assert "Overlapping approved forms" in caplog.text


def test_same_type_overlap_prefers_earliest_start_then_lowest_id():
    later = _form(1, LeaveType.EXCUSE, date(2025, 1, 7), date(2025, 1, 7))
    earlier = _form(9, LeaveType.EXCUSE, date(2025, 1, 6), date(2025, 1, 7))
    twin = _form(3, LeaveType.EXCUSE, date(2025, 1, 6), date(2025, 1, 7))

    index = build_leave_index("2025-01", [later, earlier, twin])

    assert index.lookup(1, date(2025, 1, 7)) == twin
    assert build_leave_index("2025-01", [twin, earlier, later]).by_day == index.by_day


def test_index_per_employee():
    a = _form(1, LeaveType.SICK_LEAVE, date(2025, 1, 6), date(2025, 1, 6), employee_id=1)
    b = _form(2, LeaveType.SICK_LEAVE, date(2025, 1, 6), date(2025, 1, 6), employee_id=2)

    index = build_leave_index("2025-01", [a, b])

    assert index.lookup(1, date(2025, 1, 6)) == a
    assert index.lookup(2, date(2025, 1, 6)) == b


def test_service_loads_month_and_lists_requests(leaves_repo):
    jan = _form(1, LeaveType.VACATION, date(2025, 1, 20), date(2025, 1, 21), employee_id=1)
    other = _form(2, LeaveType.WFH, date(2025, 1, 22), date(2025, 1, 22), employee_id=2)
    feb = _form(3, LeaveType.VACATION, date(2025, 2, 3), date(2025, 2, 4), employee_id=1)
    leaves_repo.intervals.extend([jan, other, feb])

    service = LeaveReconciliationService(leaves_repo)

    index = service.load_month("2025-01", [1])
    assert index.lookup(1, date(2025, 1, 21)) == jan
    assert index.lookup(2, date(2025, 1, 22)) is None

    assert list(service.approved_requests("2025-01")) == [jan, other]
    assert list(service.approved_requests("2025-02", employee_id=1)) == [feb]
