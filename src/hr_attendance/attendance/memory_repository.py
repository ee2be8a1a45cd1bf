from __future__ import annotations

import threading
from datetime import date
from typing import Iterable, Optional, Sequence

from .model import DailyAttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Arena of records keyed by (employee_id, work_date).

    Used by tests; ``build_services`` accepts it in place of the MySQL store.
    """

    def __init__(self, records: Iterable[DailyAttendanceRecord] = ()):
        self._lock = threading.Lock()
        self._by_key: dict[tuple[int, date], DailyAttendanceRecord] = {}
        self.replace_many(records)

    def get(self, employee_id: int, work_date: date) -> Optional[DailyAttendanceRecord]:
        return self._by_key.get((employee_id, work_date))

    def replace_many(self, records: Iterable[DailyAttendanceRecord]) -> int:
        count = 0
        with self._lock:
            for rec in records:
                self._by_key[rec.key] = rec
                count += 1
        return count

    def list_month(self, month: str, *, employee_id: Optional[int] = None) -> Sequence[DailyAttendanceRecord]:
        items = [
            r
            for r in self._by_key.values()
            if r.month == month and (employee_id is None or r.employee_id == employee_id)
        ]
        items.sort(key=lambda r: (r.work_date, r.employee_id))
        return items

    def list_months(self) -> Sequence[str]:
        return sorted({r.month for r in self._by_key.values()}, reverse=True)

    def __len__(self) -> int:
        return len(self._by_key)
