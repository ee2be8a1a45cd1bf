from __future__ import annotations

from ...core.enums import AttendanceStatus
from ...employees.model import WorkSchedule
from ..deduction.base import DeductionCalculator
from ..model import LeaveEvidence
from ..policy import AttendancePolicy
from .base import ClassificationStrategy, StatusDecision


class LeaveStrategy(ClassificationStrategy):
    """Approved vacation or sick leave covers the day.

    Punches, if any, are kept on the record for audit but never affect the status.
    """

    def decide(
        self,
        evidence: LeaveEvidence,
        *,
        schedule: WorkSchedule,
        policy: AttendancePolicy,
        deductions: DeductionCalculator,
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_LEAVE, related_form=evidence.interval.leave_id)
