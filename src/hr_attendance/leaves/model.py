from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from ..core.enums import LeaveType


@dataclass(frozen=True)
class ApprovedLeaveInterval:
    """Approved vacation / excuse / sick leave / WFH form.

    Produced by the forms-approval subsystem; read-only evidence here.
    ``start_date`` and ``end_date`` are inclusive.
    """

    leave_id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    metadata: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def intersects(self, start: date, end: date) -> bool:
        return self.start_date <= end and self.end_date >= start
