from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import Optional

from ..core.constants import DEFAULT_WORK_END, DEFAULT_WORK_START


@dataclass(frozen=True)
class WorkSchedule:
    """Daily working window the classifier measures punches against."""

    start_time: time = DEFAULT_WORK_START
    end_time: time = DEFAULT_WORK_END


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee as seen by the attendance engine.

    Owned by the user-management subsystem; the engine only reads it.
    """

    employee_id: int
    full_name: str
    department: Optional[str]
    employee_code: Optional[str]
    work_schedule: WorkSchedule = field(default_factory=WorkSchedule)
    is_active: bool = True
