from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..core.enums import AttendanceStatus, FingerprintMissType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import DailyAttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = (
    "employee_id",
    "work_date",
    "month",
    "clock_in",
    "clock_out",
    "status",
    "minutes_late",
    "minutes_overtime",
    "missed_clock_in",
    "missed_clock_out",
    "fingerprint_miss_type",
    "fingerprint_deduction",
    "related_form",
    "employee_code",
    "source_file",
)

# Every column except the key is overwritten: a record is never merged.
_UPSERT = """
    INSERT INTO daily_attendance ({cols})
    VALUES ({placeholders})
    ON DUPLICATE KEY UPDATE {updates}
""".format(
    cols=", ".join(_COLUMNS),
    placeholders=", ".join(["%s"] * len(_COLUMNS)),
    updates=", ".join(f"{c}=VALUES({c})" for c in _COLUMNS if c not in ("employee_id", "work_date")),
)

_SELECT = "SELECT {cols} FROM daily_attendance".format(cols=", ".join(_COLUMNS))


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: int, work_date: date) -> Optional[DailyAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s AND work_date=%s", (int(employee_id), work_date))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def replace_many(self, records: Iterable[DailyAttendanceRecord]) -> int:
        params = [_to_params(r) for r in records]
        if not params:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(_UPSERT, params)
        return len(params)

    def list_month(self, month: str, *, employee_id: Optional[int] = None) -> Sequence[DailyAttendanceRecord]:
        first, last = month_bounds(month)
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [first, last]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {where} ORDER BY work_date ASC, employee_id ASC", tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def list_months(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT month FROM daily_attendance ORDER BY month DESC")
            return [r["month"] for r in fetchall(cur)]


def _to_params(r: DailyAttendanceRecord) -> tuple:
    return (
        r.employee_id,
        r.work_date,
        r.month,
        r.clock_in,
        r.clock_out,
        r.status.value,
        int(r.minutes_late),
        int(r.minutes_overtime),
        int(r.missed_clock_in),
        int(r.missed_clock_out),
        r.fingerprint_miss_type.value,
        float(r.fingerprint_deduction),
        r.related_form,
        r.employee_code,
        r.source_file,
    )


def _to_record(row: Dict[str, Any]) -> DailyAttendanceRecord:
    related = row.get("related_form")
    return DailyAttendanceRecord(
        employee_id=int(row["employee_id"]),
        work_date=row["work_date"],
        clock_in=normalize_mysql_time(row.get("clock_in")),
        clock_out=normalize_mysql_time(row.get("clock_out")),
        status=AttendanceStatus(row["status"]),
        minutes_late=int(row.get("minutes_late") or 0),
        minutes_overtime=int(row.get("minutes_overtime") or 0),
        missed_clock_in=bool(row.get("missed_clock_in")),
        missed_clock_out=bool(row.get("missed_clock_out")),
        fingerprint_miss_type=FingerprintMissType(row.get("fingerprint_miss_type") or "none"),
        fingerprint_deduction=float(row.get("fingerprint_deduction") or 0),
        related_form=int(related) if related is not None else None,
        employee_code=row.get("employee_code"),
        source_file=row.get("source_file"),
    )
