from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Iterator, TypeVar

from ..core.constants import DEFAULT_WEEKEND_DAYS

T = TypeVar("T")


@dataclass(frozen=True)
class WorkCalendar:
    """Which dates are working days.

    ``weekend_days`` uses ``date.weekday()`` numbering (Monday=0). The default
    weekend is Friday and Saturday.
    """

    weekend_days: frozenset[int] = frozenset(DEFAULT_WEEKEND_DAYS)
    holidays: frozenset[date] = field(default_factory=frozenset)

    @classmethod
    def from_settings(cls, *, weekend_days: Iterable[int], holidays: Iterable[date] = ()) -> "WorkCalendar":
        return cls(weekend_days=frozenset(int(d) for d in weekend_days), holidays=frozenset(holidays))

    def is_weekend(self, day: date) -> bool:
        return day.weekday() in self.weekend_days

    def is_working_day(self, day: date) -> bool:
        return not self.is_weekend(day) and day not in self.holidays

    def working_days(self, start: date, end: date) -> Iterator[date]:
        day = start
        while day <= end:
            if self.is_working_day(day):
                yield day
            day += timedelta(days=1)

    def filter_punches(self, punches: Iterable[T], *, key=lambda p: p.work_date) -> tuple[list[T], int]:
        """Drop items dated on non-working days; returns (kept, skipped_count)."""
        kept: list[T] = []
        skipped = 0
        for p in punches:
            if self.is_working_day(key(p)):
                kept.append(p)
            else:
                skipped += 1
        return kept, skipped
