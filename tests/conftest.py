from __future__ import annotations

import io
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

import pandas as pd
import pytest

from hr_attendance.attendance.memory_repository import InMemoryAttendanceRepository
from hr_attendance.container import build_services
from hr_attendance.employees.model import Employee
from hr_attendance.leaves.model import ApprovedLeaveInterval
from hr_attendance.settings import EngineSettings


@dataclass
class InMemoryEmployees:
    employees: list[Employee]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return next((e for e in self.employees if e.employee_id == employee_id), None)

    def list_active(self):
        return [e for e in self.employees if e.is_active]


@dataclass
class InMemoryLeaves:
    intervals: list[ApprovedLeaveInterval] = field(default_factory=list)
    calls: int = 0

    def list_approved_between(self, *, start: date, end: date, employee_ids: Optional[Iterable[int]] = None):
        self.calls += 1
        ids = None if employee_ids is None else set(employee_ids)
        return [
            i
            for i in self.intervals
            if i.intersects(start, end) and (ids is None or i.employee_id in ids)
        ]


def build_xlsx(rows: list[list]) -> bytes:
    """Write rows (header included) to an in-memory .xlsx workbook."""
    buf = io.BytesIO()
    pd.DataFrame(rows).to_excel(buf, header=False, index=False, engine="openpyxl")
    return buf.getvalue()


@pytest.fixture
def xlsx():
    return build_xlsx


@pytest.fixture
def alice() -> Employee:
    return Employee(employee_id=1, full_name="Alice Adams", department="Engineering", employee_code="101")


@pytest.fixture
def bob() -> Employee:
    return Employee(employee_id=2, full_name="Bob Brown", department="Operations", employee_code="102")


@pytest.fixture
def employees_repo(alice, bob) -> InMemoryEmployees:
    return InMemoryEmployees([alice, bob])


@pytest.fixture
def leaves_repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def attendance_repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def engine() -> EngineSettings:
    return EngineSettings(parse_workers=2)


@pytest.fixture
def container(employees_repo, leaves_repo, attendance_repo, engine):
    return build_services(
        employees_repo=employees_repo,
        leaves_repo=leaves_repo,
        attendance_repo=attendance_repo,
        engine=engine,
    )
