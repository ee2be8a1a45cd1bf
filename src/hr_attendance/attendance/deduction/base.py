from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import FingerprintMissType


class DeductionCalculator(ABC):
    """Calculator interface (Strategy Pattern for fingerprint deductions)."""

    @abstractmethod
    def deduction_for(self, miss_type: FingerprintMissType) -> float:
        """Deduction in (fractional) days for a forgotten punch."""
        raise NotImplementedError
