from __future__ import annotations

from ...core.enums import AttendanceStatus
from ...employees.model import WorkSchedule
from ..deduction.base import DeductionCalculator
from ..model import ExcuseEvidence
from ..policy import AttendancePolicy
from .base import ClassificationStrategy, StatusDecision


class ExcuseStrategy(ClassificationStrategy):
    """Approved excuse covers the day."""

    def decide(
        self,
        evidence: ExcuseEvidence,
        *,
        schedule: WorkSchedule,
        policy: AttendancePolicy,
        deductions: DeductionCalculator,
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.EXCUSED, related_form=evidence.interval.leave_id)
