import logging

from hr_attendance.employees.model import Employee
from hr_attendance.employees.resolver import EmployeeResolver, UnmatchedCodes


def _emp(employee_id, code, active=True):
    return Employee(
        employee_id=employee_id, full_name=f"E{employee_id}", department=None, employee_code=code, is_active=active
    )


def test_resolve_trims_codes():
    resolver = EmployeeResolver([_emp(1, " 101"), _emp(2, "102")])

    assert resolver.resolve("101 ").employee_id == 1
    assert resolver.resolve("102").employee_id == 2
    assert resolver.resolve("103") is None


def test_inactive_and_codeless_employees_are_not_resolvable():
    resolver = EmployeeResolver([_emp(1, "101", active=False), _emp(2, None)])

    assert resolver.resolve("101") is None


def test_shared_code_resolves_to_nobody(caplog):
    with caplog.at_level(logging.WARNING, logger="hr_attendance.employees.resolver"):
        resolver = EmployeeResolver([_emp(1, "101"), _emp(2, "101 "), _emp(3, "300")])

    assert resolver.resolve("101") is None
    assert resolver.resolve("300").employee_id == 3
    assert resolver.collisions == frozenset({"101"})
    assert "shared by employees [1, 2]" in caplog.text


def test_unmatched_codes_dedupe_per_file_and_keep_order():
    first = UnmatchedCodes()
    first.add(code="900", name="X", file="a.xlsx")
    first.add(code="900", name="X", file="a.xlsx")
    first.add(code="901", name=None, file="a.xlsx")

    second = UnmatchedCodes()
    second.add(code="900", name="X", file="b.xlsx")
    second.add(code="901", name=None, file="a.xlsx")

    merged = first.merge(second)

    assert [(u.code, u.file) for u in merged.items] == [("900", "a.xlsx"), ("901", "a.xlsx"), ("900", "b.xlsx")]
    assert len(first) == 2
