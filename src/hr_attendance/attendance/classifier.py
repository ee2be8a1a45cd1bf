from __future__ import annotations

from datetime import date, time
from typing import Iterable, Optional

from ..employees.model import Employee
from ..leaves.model import ApprovedLeaveInterval
from .deduction.base import DeductionCalculator
from .deduction.standard_deduction import StandardDeductionCalculator
from .factory import ClassificationStrategyFactory, build_evidence
from .model import DailyAttendanceRecord
from .policy import AttendancePolicy


class DailyClassifier:
    """Turns one (employee, date) worth of evidence into a DailyAttendanceRecord.

    Pure: never raises for missing data, every gap degrades to an explicit
    status or missed-punch flag.
    """

    def __init__(
        self,
        policy: AttendancePolicy | None = None,
        *,
        deductions: DeductionCalculator | None = None,
        strategy_factory: ClassificationStrategyFactory | None = None,
    ):
        self._policy = policy or AttendancePolicy()
        self._deductions = deductions or StandardDeductionCalculator(self._policy)
        self._factory = strategy_factory or ClassificationStrategyFactory()

    @property
    def policy(self) -> AttendancePolicy:
        return self._policy

    def classify(
        self,
        *,
        employee: Employee,
        work_date: date,
        punches: Iterable[time] = (),
        leave: Optional[ApprovedLeaveInterval] = None,
        source_file: Optional[str] = None,
    ) -> DailyAttendanceRecord:
        evidence = build_evidence(punches, leave)
        strategy = self._factory.for_evidence(evidence)
        decision = strategy.decide(
            evidence,
            schedule=employee.work_schedule,
            policy=self._policy,
            deductions=self._deductions,
        )

        return DailyAttendanceRecord(
            employee_id=employee.employee_id,
            work_date=work_date,
            clock_in=evidence.clock_in,
            clock_out=evidence.clock_out,
            status=decision.status,
            minutes_late=decision.minutes_late,
            minutes_overtime=decision.minutes_overtime,
            missed_clock_in=decision.missed_clock_in,
            missed_clock_out=decision.missed_clock_out,
            fingerprint_miss_type=decision.fingerprint_miss_type,
            fingerprint_deduction=decision.fingerprint_deduction,
            related_form=decision.related_form,
            employee_code=employee.employee_code,
            source_file=source_file,
        )
