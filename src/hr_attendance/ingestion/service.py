from __future__ import annotations

import io
import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from functools import reduce
from typing import Iterable, Optional, Sequence

from ..attendance.classifier import DailyClassifier
from ..attendance.model import DailyAttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_of
from ..core.constants import DEFAULT_MAX_UPLOAD_FILES, DEFAULT_PARSE_WORKERS
from ..core.exceptions import FileFormatError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..employees.resolver import EmployeeResolver, UnmatchedCodes
from ..leaves.reconciliation import LeaveReconciliationService
from ..workdays.calendar import WorkCalendar
from .parser import AttendanceFileParser, RawPunch
from .summary import UploadSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded spreadsheet held in memory; never written to disk."""

    filename: str
    content: bytes


@dataclass
class _ParsedFile:
    summary: UploadSummary
    punches: list[RawPunch] = field(default_factory=list)


class IngestionService:
    """Use case: turn a batch of device exports into stored daily records.

    Flow: parse (parallel, per file) -> weekend/holiday filter -> resolve codes
    -> group by (employee, date) -> classify with the month's leave index
    -> replace records. A bad file or a bad row never aborts the batch.
    """

    def __init__(
        self,
        *,
        parser: AttendanceFileParser,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        leaves: LeaveReconciliationService,
        classifier: DailyClassifier,
        calendar: Optional[WorkCalendar] = None,
        max_files: int = DEFAULT_MAX_UPLOAD_FILES,
        workers: int = DEFAULT_PARSE_WORKERS,
    ):
        self._parser = parser
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves
        self._classifier = classifier
        self._calendar = calendar or WorkCalendar()
        self._max_files = int(max_files)
        self._workers = max(1, int(workers))

    def ingest(self, files: Iterable[UploadedFile]) -> UploadSummary:
        files = list(files)
        if not files:
            raise ValidationError("No files uploaded")
        if len(files) > self._max_files:
            raise ValidationError(f"Too many files. Maximum {self._max_files} files per upload")

        with ThreadPoolExecutor(max_workers=min(self._workers, len(files))) as pool:
            parsed = list(pool.map(self._parse_one, files))

        summary = reduce(lambda acc, p: acc.merge(p.summary), parsed, UploadSummary())
        punches = [punch for p in parsed for punch in p.punches]

        kept, _ = self._calendar.filter_punches(punches)
        # Counted per spreadsheet row: a row's punches share one date.
        skipped = _row_count(punches) - _row_count(kept)
        grouped, employees, unmatched = self._group(kept)
        records = self._build_records(grouped, employees)
        saved = self._attendance.replace_many(records)

        summary = summary.merge(UploadSummary(weekend_skipped=skipped, saved_records=saved, unmatched=unmatched))
        logger.info(
            "Upload processed: files=%d/%d rows=%d failed=%d weekend_skipped=%d saved=%d unmatched=%d",
            summary.processed_files,
            summary.total_files,
            summary.total_records,
            summary.failed_records,
            summary.weekend_skipped,
            summary.saved_records,
            len(summary.unmatched),
        )
        return summary

    def _parse_one(self, upload: UploadedFile) -> _ParsedFile:
        try:
            result = self._parser.parse_file(io.BytesIO(upload.content), upload.filename)
        except FileFormatError as e:
            logger.warning("Skipping %s: %s", upload.filename, e)
            return _ParsedFile(summary=UploadSummary.for_failed_file(upload.filename, str(e)))
        except Exception as e:
            logger.exception("Unexpected error while parsing %s", upload.filename)
            return _ParsedFile(summary=UploadSummary.for_failed_file(upload.filename, str(e)))

        return _ParsedFile(summary=UploadSummary.for_file(result), punches=result.punches)

    def _group(
        self, punches: Sequence[RawPunch]
    ) -> tuple[dict[tuple[int, date], list[RawPunch]], dict[int, Employee], UnmatchedCodes]:
        resolver = EmployeeResolver(self._employees.list_active())
        unmatched = UnmatchedCodes()
        grouped: dict[tuple[int, date], list[RawPunch]] = defaultdict(list)

        # Everyone with a usable code is on the roster, punches or not.
        employees: dict[int, Employee] = {e.employee_id: e for e in resolver.employees}

        for punch in punches:
            emp = resolver.resolve(punch.employee_code)
            if emp is None:
                unmatched.add(code=punch.employee_code, name=punch.name, file=punch.source_file)
                continue
            grouped[(emp.employee_id, punch.work_date)].append(punch)

        if unmatched:
            logger.warning("%d employee code(s) in this upload did not match any active employee", len(unmatched))
        return grouped, employees, unmatched

    def _build_records(
        self,
        grouped: dict[tuple[int, date], list[RawPunch]],
        employees: dict[int, Employee],
    ) -> list[DailyAttendanceRecord]:
        # Each month touched gets a record for every working day between the
        # first and last punch date seen in the batch, for every employee on
        # the roster. Days without punches or leave become absences.
        days_by_month: dict[str, list[date]] = defaultdict(list)
        for _, day in grouped:
            days_by_month[month_of(day)].append(day)

        ids = sorted(employees)
        records: list[DailyAttendanceRecord] = []
        for month in sorted(days_by_month):
            index = self._leaves.load_month(month, ids)
            span = list(self._calendar.working_days(min(days_by_month[month]), max(days_by_month[month])))

            for employee_id in ids:
                employee = employees[employee_id]
                for day in span:
                    day_punches = sorted(grouped.get((employee_id, day), ()), key=lambda p: p.punch_time)
                    records.append(
                        self._classifier.classify(
                            employee=employee,
                            work_date=day,
                            punches=[p.punch_time for p in day_punches],
                            leave=index.lookup(employee_id, day),
                            source_file=day_punches[0].source_file if day_punches else None,
                        )
                    )
        return records


def _row_count(punches: Iterable[RawPunch]) -> int:
    return len({(p.source_file, p.row_number) for p in punches})
