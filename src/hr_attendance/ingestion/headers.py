from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ..core.exceptions import FileFormatError

# Canonical field -> header spellings seen in biometric device exports.
# Earlier aliases win when a sheet carries several candidate columns.
DEFAULT_HEADER_ALIASES: dict[str, tuple[str, ...]] = {
    "code": (
        "Employee Code",
        "EmployeeCode",
        "AC-No.",
        "AC No",
        "Employee ID",
        "Emp No",
        "Enroll No",
        "User ID",
        "Badge",
        "Code",
        "ID",
    ),
    "name": ("Name", "Employee Name", "EmployeeName", "Full Name"),
    "datetime": ("Date/Time", "DateTime", "Timestamp", "Check Time", "Punch Time"),
    "date": ("Date", "Work Date", "Punch Date"),
    "clock_in": ("Clock In", "ClockIn", "Time In", "CheckIn", "Check In", "On Duty", "In", "Time"),
    "clock_out": ("Clock Out", "ClockOut", "Time Out", "CheckOut", "Check Out", "Off Duty", "Out"),
}

_FIELD_ORDER = ("code", "name", "datetime", "date", "clock_in", "clock_out")
_NON_ALNUM = re.compile(r"[^0-9a-z]+")


def normalize_header(value: Any) -> str:
    """'AC-No.' / 'ac no' / 'AC_NO' all become 'acno'."""
    if value is None:
        return ""
    return _NON_ALNUM.sub("", str(value).strip().lower())


@dataclass(frozen=True)
class ColumnMap:
    """Column index per canonical field (None when the sheet lacks it)."""

    code: Optional[int] = None
    name: Optional[int] = None
    datetime: Optional[int] = None
    date: Optional[int] = None
    clock_in: Optional[int] = None
    clock_out: Optional[int] = None

    @property
    def is_usable(self) -> bool:
        has_date = self.date is not None or self.datetime is not None
        has_time = self.clock_in is not None or self.clock_out is not None or self.datetime is not None
        return self.code is not None and has_date and has_time

    def describe(self, headers: Sequence[Any]) -> dict[str, str]:
        out = {}
        for f in _FIELD_ORDER:
            idx = getattr(self, f)
            if idx is not None:
                out[f] = str(headers[idx]).strip()
        return out


class HeaderAliasTable:
    """Configurable header-alias table used to locate columns by name."""

    def __init__(self, aliases: Optional[Mapping[str, Sequence[str]]] = None):
        merged = {k: tuple(v) for k, v in DEFAULT_HEADER_ALIASES.items()}
        for field_name, names in (aliases or {}).items():
            if field_name not in merged:
                raise ValueError(f"Unknown attendance column: {field_name}")
            merged[field_name] = tuple(names)
        self._aliases = {f: [normalize_header(n) for n in names] for f, names in merged.items()}

    def match_row(self, cells: Sequence[Any]) -> ColumnMap:
        normalized = [normalize_header(c) for c in cells]
        taken: set[int] = set()
        found: dict[str, int] = {}

        for field_name in _FIELD_ORDER:
            for alias in self._aliases[field_name]:
                idx = next((i for i, h in enumerate(normalized) if h == alias and i not in taken), None)
                if idx is not None:
                    found[field_name] = idx
                    taken.add(idx)
                    break

        return ColumnMap(**found)

    def detect(self, rows: Sequence[Sequence[Any]], *, scan_rows: int) -> tuple[int, ColumnMap]:
        """Find the header row among the first ``scan_rows`` rows.

        Device exports often put a title or a date-range banner above the
        header, so the first row cannot be assumed.
        """

        for index, cells in enumerate(rows[:scan_rows]):
            columns = self.match_row(cells)
            if columns.is_usable:
                return index, columns

        raise FileFormatError(
            "Missing required columns. Expected: Employee Code, Date, Clock In (Clock Out optional)"
        )
