from __future__ import annotations

from ..policy import AttendancePolicy
from ...core.enums import FingerprintMissType
from .base import DeductionCalculator


class StandardDeductionCalculator(DeductionCalculator):
    """Flat rate per missing side, taken from the attendance policy.

    ``BOTH`` (no punches at all) is an absence, not a forgotten punch, and
    carries no fingerprint deduction.
    """

    def __init__(self, policy: AttendancePolicy):
        self._policy = policy

    def deduction_for(self, miss_type: FingerprintMissType) -> float:
        if miss_type == FingerprintMissType.CLOCK_IN:
            return float(self._policy.clock_in_miss_deduction)
        if miss_type == FingerprintMissType.CLOCK_OUT:
            return float(self._policy.clock_out_miss_deduction)
        return 0.0
