from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, BinaryIO, Optional, Sequence, Union

import pandas as pd

from ..core.constants import ALLOWED_UPLOAD_EXTENSIONS, HEADER_SCAN_ROWS
from ..core.exceptions import FileFormatError, RowParseError
from .cells import is_blank, parse_code, parse_date, parse_name, parse_time
from .headers import ColumnMap, HeaderAliasTable

logger = logging.getLogger(__name__)

_EXCEL_ENGINES = {".xlsx": "openpyxl", ".xls": "xlrd"}


@dataclass(frozen=True)
class RawPunch:
    """One clock event read from a device export; direction is unknown."""

    employee_code: str
    name: Optional[str]
    work_date: date
    punch_time: time
    source_file: str
    row_number: int


@dataclass
class FileParseResult:
    filename: str
    punches: list[RawPunch] = field(default_factory=list)
    total_rows: int = 0
    failed_rows: int = 0
    errors: list[dict] = field(default_factory=list)
    header_row: Optional[int] = None
    columns: dict[str, str] = field(default_factory=dict)

    @property
    def valid_rows(self) -> int:
        return self.total_rows - self.failed_rows


class AttendanceFileParser:
    """Reads one biometric export into RawPunch tuples.

    Columns are located by header name (see ``HeaderAliasTable``), never by
    position. Malformed rows are counted and skipped; only an unreadable file
    or a sheet without a recognizable header raises ``FileFormatError``.
    """

    def __init__(
        self,
        aliases: Optional[HeaderAliasTable] = None,
        *,
        dayfirst: bool = False,
        scan_rows: int = HEADER_SCAN_ROWS,
    ):
        self._aliases = aliases or HeaderAliasTable()
        self._dayfirst = bool(dayfirst)
        self._scan_rows = int(scan_rows)

    def read_frame(self, source: Union[str, os.PathLike, BinaryIO], filename: str) -> pd.DataFrame:
        ext = os.path.splitext(filename or "")[1].lower()
        if ext not in ALLOWED_UPLOAD_EXTENSIONS:
            raise FileFormatError(f"Only .xls and .xlsx files are allowed: {filename}")

        try:
            return pd.read_excel(source, sheet_name=0, header=None, dtype=object, engine=_EXCEL_ENGINES[ext])
        except Exception as e:
            raise FileFormatError(f"Failed to parse XLS file: {e}") from e

    def parse_file(self, source: Union[str, os.PathLike, BinaryIO], filename: str) -> FileParseResult:
        frame = self.read_frame(source, filename)
        return self.parse_frame(frame, filename)

    def parse_frame(self, frame: pd.DataFrame, filename: str) -> FileParseResult:
        rows = frame.values.tolist()
        header_index, columns = self._aliases.detect(rows, scan_rows=self._scan_rows)

        result = FileParseResult(
            filename=filename,
            header_row=header_index + 1,
            columns=columns.describe(rows[header_index]),
        )

        for offset, cells in enumerate(rows[header_index + 1 :]):
            if all(is_blank(c) for c in cells):
                continue

            # Spreadsheet row numbers are 1-based.
            row_number = header_index + offset + 2
            result.total_rows += 1
            try:
                result.punches.extend(self._parse_row(cells, columns, row_number, filename))
            except RowParseError as e:
                result.failed_rows += 1
                result.errors.append({"row": row_number, "error": str(e)})
                logger.debug("%s: %s", filename, e)

        if result.failed_rows:
            logger.warning(
                "%s: %d of %d rows could not be parsed", filename, result.failed_rows, result.total_rows
            )
        return result

    def _parse_row(self, cells: Sequence[Any], columns: ColumnMap, row_number: int, filename: str) -> list[RawPunch]:
        def cell(idx: Optional[int]) -> Any:
            return cells[idx] if idx is not None and idx < len(cells) else None

        code = parse_code(cell(columns.code))
        if not code:
            raise RowParseError(row_number, "Missing Employee Code")

        work_date, embedded_time = self._row_date(cell(columns.date), cell(columns.datetime), row_number)

        times: list[time] = []
        primary = cell(columns.clock_in)
        if not is_blank(primary):
            try:
                times.append(parse_time(primary))
            except ValueError:
                raise RowParseError(row_number, f"Invalid Clock In time format: {primary}") from None

        secondary = cell(columns.clock_out)
        if not is_blank(secondary):
            try:
                times.append(parse_time(secondary))
            except ValueError:
                logger.warning("%s row %d: invalid Clock Out time %r, ignoring it", filename, row_number, secondary)

        if embedded_time is not None:
            times.append(embedded_time)

        if not times:
            raise RowParseError(row_number, "Missing Clock In time")

        name = parse_name(cell(columns.name))
        return [
            RawPunch(
                employee_code=code,
                name=name,
                work_date=work_date,
                punch_time=t,
                source_file=filename,
                row_number=row_number,
            )
            for t in times
        ]

    def _row_date(self, date_cell: Any, datetime_cell: Any, row_number: int) -> tuple[date, Optional[time]]:
        value = date_cell if not is_blank(date_cell) else datetime_cell
        if is_blank(value):
            raise RowParseError(row_number, "Missing Date")
        try:
            return parse_date(value, dayfirst=self._dayfirst)
        except ValueError:
            raise RowParseError(row_number, f"Invalid date format: {value}") from None
