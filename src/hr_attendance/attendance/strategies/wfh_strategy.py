from __future__ import annotations

from ...core.enums import AttendanceStatus
from ...employees.model import WorkSchedule
from ..deduction.base import DeductionCalculator
from ..model import WfhEvidence
from ..policy import AttendancePolicy
from .base import ClassificationStrategy, StatusDecision


class WfhStrategy(ClassificationStrategy):
    """Approved work-from-home day."""

    def decide(
        self,
        evidence: WfhEvidence,
        *,
        schedule: WorkSchedule,
        policy: AttendancePolicy,
        deductions: DeductionCalculator,
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.WFH, related_form=evidence.interval.leave_id)
