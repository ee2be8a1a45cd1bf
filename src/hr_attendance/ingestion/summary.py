from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..employees.resolver import UnmatchedCodes
from .parser import FileParseResult


@dataclass(frozen=True)
class FileSummary:
    filename: str
    processed: bool
    total_rows: int = 0
    failed_rows: int = 0
    header_row: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "file": self.filename,
            "processed": self.processed,
            "totalRecords": self.total_rows,
            "failedRecords": self.failed_rows,
            "headerRow": self.header_row,
            "error": self.error,
        }


@dataclass
class UploadSummary:
    """Counters for one upload batch.

    ``merge`` is associative and order-independent for the counters, so
    per-file summaries can be produced in parallel and combined in any order.
    """

    total_files: int = 0
    processed_files: int = 0
    successful_records: int = 0
    failed_records: int = 0
    weekend_skipped: int = 0
    saved_records: int = 0
    unmatched: UnmatchedCodes = field(default_factory=UnmatchedCodes)
    errors: list[dict] = field(default_factory=list)
    files: list[FileSummary] = field(default_factory=list)

    @property
    def total_records(self) -> int:
        return self.successful_records + self.failed_records

    @classmethod
    def for_file(cls, result: FileParseResult) -> "UploadSummary":
        return cls(
            total_files=1,
            processed_files=1,
            successful_records=result.valid_rows,
            failed_records=result.failed_rows,
            files=[
                FileSummary(
                    filename=result.filename,
                    processed=True,
                    total_rows=result.total_rows,
                    failed_rows=result.failed_rows,
                    header_row=result.header_row,
                )
            ],
        )

    @classmethod
    def for_failed_file(cls, filename: str, error: str) -> "UploadSummary":
        return cls(
            total_files=1,
            errors=[{"file": filename, "error": error}],
            files=[FileSummary(filename=filename, processed=False, error=error)],
        )

    def merge(self, other: "UploadSummary") -> "UploadSummary":
        return UploadSummary(
            total_files=self.total_files + other.total_files,
            processed_files=self.processed_files + other.processed_files,
            successful_records=self.successful_records + other.successful_records,
            failed_records=self.failed_records + other.failed_records,
            weekend_skipped=self.weekend_skipped + other.weekend_skipped,
            saved_records=self.saved_records + other.saved_records,
            unmatched=self.unmatched.merge(other.unmatched),
            errors=[*self.errors, *other.errors],
            files=[*self.files, *other.files],
        )

    def to_dict(self) -> dict:
        return {
            "processedFiles": self.processed_files,
            "totalFiles": self.total_files,
            "totalRecords": self.total_records,
            "successfulRecords": self.successful_records,
            "failedRecords": self.failed_records,
            "weekendSkipped": self.weekend_skipped,
            "savedRecords": self.saved_records,
            "unmatchedCodes": [{"code": u.code, "name": u.name, "file": u.file} for u in self.unmatched.items],
            "errors": list(self.errors),
            "files": [f.to_dict() for f in self.files],
        }
