from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, load_json_column
from .model import ApprovedLeaveInterval
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_approved_between(
        self,
        *,
        start: date,
        end: date,
        employee_ids: Optional[Iterable[int]] = None,
    ) -> Sequence[ApprovedLeaveInterval]:
        clauses = ["status='approved'", "start_date <= %s", "end_date >= %s"]
        params: list[object] = [end, start]

        ids = sorted({int(i) for i in employee_ids}) if employee_ids is not None else None
        if ids is not None:
            if not ids:
                return []
            clauses.append(f"employee_id IN ({', '.join(['%s'] * len(ids))})")
            params.extend(ids)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT leave_id, employee_id, leave_type, start_date, end_date, metadata
                FROM approved_leaves
                WHERE {where}
                ORDER BY start_date ASC, leave_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                ApprovedLeaveInterval(
                    leave_id=int(r["leave_id"]),
                    employee_id=int(r["employee_id"]),
                    leave_type=LeaveType(r["leave_type"]),
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    metadata=load_json_column(r.get("metadata")),
                )
                for r in rows
            ]
