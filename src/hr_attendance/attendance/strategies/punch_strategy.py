from __future__ import annotations

from ...common.datetime_utils import minutes_after
from ...core.enums import AttendanceStatus, FingerprintMissType
from ...employees.model import WorkSchedule
from ..deduction.base import DeductionCalculator
from ..model import PunchEvidence
from ..policy import AttendancePolicy
from .base import ClassificationStrategy, StatusDecision


class PunchStrategy(ClassificationStrategy):
    """No approved form for the day: classify from the clock punches."""

    def decide(
        self,
        evidence: PunchEvidence,
        *,
        schedule: WorkSchedule,
        policy: AttendancePolicy,
        deductions: DeductionCalculator,
    ) -> StatusDecision:
        clock_in, clock_out = evidence.clock_in, evidence.clock_out

        if clock_in is None and clock_out is None:
            return StatusDecision(
                status=AttendanceStatus.ABSENT,
                missed_clock_in=True,
                missed_clock_out=True,
                fingerprint_miss_type=FingerprintMissType.BOTH,
                fingerprint_deduction=deductions.deduction_for(FingerprintMissType.BOTH),
            )

        missed_in = clock_in is None
        missed_out = clock_out is None
        if missed_in:
            miss_type = FingerprintMissType.CLOCK_IN
        elif missed_out:
            miss_type = FingerprintMissType.CLOCK_OUT
        else:
            miss_type = FingerprintMissType.NONE

        minutes_late = minutes_after(clock_in, schedule.start_time) if clock_in else 0
        minutes_overtime = minutes_after(clock_out, schedule.end_time) if clock_out else 0
        status = AttendanceStatus.LATE if minutes_late > policy.grace_minutes else AttendanceStatus.PRESENT

        return StatusDecision(
            status=status,
            minutes_late=minutes_late,
            minutes_overtime=minutes_overtime,
            missed_clock_in=missed_in,
            missed_clock_out=missed_out,
            fingerprint_miss_type=miss_type,
            fingerprint_deduction=deductions.deduction_for(miss_type) if miss_type != FingerprintMissType.NONE else 0.0,
        )
