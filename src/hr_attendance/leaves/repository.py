from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from .model import ApprovedLeaveInterval


class LeaveRepository(Protocol):
    def list_approved_between(
        self,
        *,
        start: date,
        end: date,
        employee_ids: Optional[Iterable[int]] = None,
    ) -> Sequence[ApprovedLeaveInterval]:
        """Approved intervals intersecting [start, end].

        Pending or rejected forms are never returned.
        """

        raise NotImplementedError
