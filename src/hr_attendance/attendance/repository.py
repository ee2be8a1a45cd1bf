from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from .model import DailyAttendanceRecord


class AttendanceRepository(Protocol):
    """Store of DailyAttendanceRecords keyed by (employee_id, work_date).

    Writes replace the whole record for a key (last write wins).
    """

    def get(self, employee_id: int, work_date: date) -> Optional[DailyAttendanceRecord]:
        raise NotImplementedError

    def replace_many(self, records: Iterable[DailyAttendanceRecord]) -> int:
        """Create-or-replace each record; returns the number written."""

        raise NotImplementedError

    def list_month(self, month: str, *, employee_id: Optional[int] = None) -> Sequence[DailyAttendanceRecord]:
        raise NotImplementedError

    def list_months(self) -> Sequence[str]:
        """Distinct YYYY-MM months having at least one record."""

        raise NotImplementedError
