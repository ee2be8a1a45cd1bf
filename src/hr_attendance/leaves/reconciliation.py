from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..core.enums import LeaveType
from .model import ApprovedLeaveInterval
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

# Lower rank wins when several approved intervals cover the same day.
LEAVE_TYPE_RANK = {
    LeaveType.VACATION: 0,
    LeaveType.SICK_LEAVE: 0,
    LeaveType.EXCUSE: 1,
    LeaveType.WFH: 2,
}


def precedence_key(interval: ApprovedLeaveInterval) -> tuple[int, date, int]:
    return (LEAVE_TYPE_RANK[interval.leave_type], interval.start_date, interval.leave_id)


@dataclass(frozen=True)
class LeaveIndex:
    """Approved intervals of one month, indexed by (employee_id, date)."""

    month: str
    intervals: tuple[ApprovedLeaveInterval, ...]
    by_day: dict[tuple[int, date], ApprovedLeaveInterval]

    def lookup(self, employee_id: int, day: date) -> Optional[ApprovedLeaveInterval]:
        return self.by_day.get((employee_id, day))


def build_leave_index(month: str, intervals: Iterable[ApprovedLeaveInterval]) -> LeaveIndex:
    """Expand intervals into per-day entries clipped to ``month``.

    Overlaps are a data-integrity issue upstream: they are logged and resolved
    deterministically (leave > excuse > wfh, then earliest start, then lowest id).
    """

    first, last = month_bounds(month)
    kept = sorted((i for i in intervals if i.intersects(first, last)), key=precedence_key)

    by_day: dict[tuple[int, date], ApprovedLeaveInterval] = {}
    for interval in kept:
        day = max(interval.start_date, first)
        end = min(interval.end_date, last)
        while day <= end:
            key = (interval.employee_id, day)
            current = by_day.get(key)
            if current is None:
                by_day[key] = interval
            else:
                logger.warning(
                    "Overlapping approved forms for employee %s on %s: keeping %s #%s over %s #%s",
                    interval.employee_id,
                    day.isoformat(),
                    current.leave_type.value,
                    current.leave_id,
                    interval.leave_type.value,
                    interval.leave_id,
                )
            day += timedelta(days=1)

    ordered = tuple(sorted(kept, key=lambda i: (i.start_date, i.employee_id, i.leave_id)))
    return LeaveIndex(month=month, intervals=ordered, by_day=by_day)


class LeaveReconciliationService:
    """Use case: load approved forms for a month and index them for classification."""

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def load_month(self, month: str, employee_ids: Optional[Iterable[int]] = None) -> LeaveIndex:
        first, last = month_bounds(month)
        ids = None if employee_ids is None else sorted(set(employee_ids))
        intervals = self._leaves.list_approved_between(start=first, end=last, employee_ids=ids)
        return build_leave_index(month, intervals)

    def approved_requests(self, month: str, employee_id: Optional[int] = None) -> Sequence[ApprovedLeaveInterval]:
        """Raw approved forms intersecting ``month`` (for "approved requests" badges)."""
        ids = None if employee_id is None else [employee_id]
        return self.load_month(month, ids).intervals
