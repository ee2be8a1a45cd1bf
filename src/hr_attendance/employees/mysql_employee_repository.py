from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Employee, WorkSchedule
from .repository import EmployeeRepository

_SELECT = """
    SELECT employee_id, full_name, department, employee_code, work_start_time, work_end_time, is_active
    FROM employees
"""


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, default_schedule: Optional[WorkSchedule] = None):
        self._conn_factory = conn_factory
        self._default_schedule = default_schedule or WorkSchedule()

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return self._to_employee(row) if row else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE is_active=1 ORDER BY employee_id")
            return [self._to_employee(r) for r in fetchall(cur)]

    def _to_employee(self, row: Dict[str, Any]) -> Employee:
        # Employees without their own hours follow the company default.
        start = normalize_mysql_time(row.get("work_start_time"))
        end = normalize_mysql_time(row.get("work_end_time"))
        schedule = WorkSchedule(start_time=start, end_time=end) if start and end else self._default_schedule
        code = row.get("employee_code")
        return Employee(
            employee_id=int(row["employee_id"]),
            full_name=row["full_name"],
            department=row.get("department"),
            employee_code=str(code).strip() if code else None,
            work_schedule=schedule,
            is_active=bool(row.get("is_active", True)),
        )
