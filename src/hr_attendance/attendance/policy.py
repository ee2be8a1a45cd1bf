from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import (
    DEFAULT_FINGERPRINT_DEDUCTION_CLOCK_IN,
    DEFAULT_FINGERPRINT_DEDUCTION_CLOCK_OUT,
    DEFAULT_LATE_GRACE_MINUTES,
)
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendancePolicy:
    """HR policy constants used during classification.

    Values come from the settings module; nothing here is derived.
    """

    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    clock_in_miss_deduction: float = DEFAULT_FINGERPRINT_DEDUCTION_CLOCK_IN
    clock_out_miss_deduction: float = DEFAULT_FINGERPRINT_DEDUCTION_CLOCK_OUT

    def __post_init__(self) -> None:
        if self.grace_minutes < 0:
            raise ValidationError("Grace minutes cannot be negative")
        if self.clock_in_miss_deduction < 0 or self.clock_out_miss_deduction < 0:
            raise ValidationError("Fingerprint deduction rates cannot be negative")
