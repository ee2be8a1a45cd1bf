from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus, FingerprintMissType
from ...employees.model import WorkSchedule
from ..deduction.base import DeductionCalculator
from ..model import DayEvidence
from ..policy import AttendancePolicy


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    minutes_late: int = 0
    minutes_overtime: int = 0
    missed_clock_in: bool = False
    missed_clock_out: bool = False
    fingerprint_miss_type: FingerprintMissType = FingerprintMissType.NONE
    fingerprint_deduction: float = 0.0
    related_form: Optional[int] = None


class ClassificationStrategy(ABC):
    """Strategy Pattern: encapsulate how one kind of day evidence becomes a status."""

    @abstractmethod
    def decide(
        self,
        evidence: DayEvidence,
        *,
        schedule: WorkSchedule,
        policy: AttendancePolicy,
        deductions: DeductionCalculator,
    ) -> StatusDecision:
        raise NotImplementedError
