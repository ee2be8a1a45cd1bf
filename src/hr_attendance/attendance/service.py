from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..common.validators import require_month
from ..employees.repository import EmployeeRepository
from ..leaves.reconciliation import LeaveReconciliationService
from .classifier import DailyClassifier
from .model import DailyAttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: re-run classification over stored records.

    Called after a form is approved or revoked upstream, so the month's
    statuses reflect the current set of approved intervals.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        leaves: LeaveReconciliationService,
        *,
        classifier: Optional[DailyClassifier] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._leaves = leaves
        self._classifier = classifier or DailyClassifier()

    def reclassify_month(self, month: str, employee_ids: Optional[Iterable[int]] = None) -> int:
        """Rebuild every stored record of ``month``; returns the number replaced."""

        month = require_month(month)
        wanted = None if employee_ids is None else {int(i) for i in employee_ids}

        stored = [r for r in self._attendance.list_month(month) if wanted is None or r.employee_id in wanted]
        if not stored:
            return 0

        index = self._leaves.load_month(month, {r.employee_id for r in stored})
        employees = {}
        rebuilt: list[DailyAttendanceRecord] = []
        for rec in stored:
            if rec.employee_id not in employees:
                employees[rec.employee_id] = self._employees.get_by_id(rec.employee_id)
            employee = employees[rec.employee_id]
            if employee is None:
                logger.warning(
                    "Employee %s no longer exists; keeping %s record as is", rec.employee_id, rec.work_date
                )
                continue

            punches = [t for t in (rec.clock_in, rec.clock_out) if t is not None]
            rebuilt.append(
                self._classifier.classify(
                    employee=employee,
                    work_date=rec.work_date,
                    punches=punches,
                    leave=index.lookup(rec.employee_id, rec.work_date),
                    source_file=rec.source_file,
                )
            )

        count = self._attendance.replace_many(rebuilt)
        logger.info("Reclassified %d record(s) for %s", count, month)
        return count
