"""Print what the parser sees in a device export.

Usage: python scripts/inspect_attendance_file.py <file.xls|file.xlsx> [rows]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from hr_attendance.core.exceptions import FileFormatError
from hr_attendance.ingestion.parser import AttendanceFileParser


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Inspect a biometric attendance export")
    ap.add_argument("file", type=Path)
    ap.add_argument("rows", type=int, nargs="?", default=10, help="number of parsed punches to print")
    ap.add_argument("--dayfirst", action="store_true", help="read 01/02/2025 as 1 February")
    args = ap.parse_args(argv)

    parser = AttendanceFileParser(dayfirst=args.dayfirst)
    try:
        frame = parser.read_frame(args.file, args.file.name)
    except FileFormatError as e:
        print(f"ERROR: {e}")
        return 1
    print(f"File: {args.file.name}  ({frame.shape[0]} rows x {frame.shape[1]} columns)")

    try:
        result = parser.parse_frame(frame, args.file.name)
    except FileFormatError as e:
        print(f"ERROR: {e}")
        print("First rows as read:")
        print(frame.head(args.rows).to_string())
        return 1

    print(f"Header row: {result.header_row}")
    for field_name, header in result.columns.items():
        print(f"  {field_name:<10} <- {header!r}")
    print(f"Rows: {result.total_rows}  failed: {result.failed_rows}  punches: {len(result.punches)}")

    for punch in result.punches[: args.rows]:
        print(
            f"  row {punch.row_number:>5}  {punch.employee_code:<10} {punch.name or '-':<25} "
            f"{punch.work_date.isoformat()} {punch.punch_time.strftime('%H:%M')}"
        )
    for err in result.errors[: args.rows]:
        print(f"  ! {err['error']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
