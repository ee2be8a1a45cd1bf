"""Compare a device export with the records stored for a month.

Usage: python scripts/verify_attendance.py <file.xls|file.xlsx> <YYYY-MM>
"""

from __future__ import annotations

import argparse
import importlib
import sys
from collections import defaultdict
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from dotenv import load_dotenv

from config import get_settings_module

from hr_attendance.common.datetime_utils import format_time, month_of
from hr_attendance.common.validators import require_month
from hr_attendance.container import Container, build_container
from hr_attendance.employees.resolver import EmployeeResolver
from hr_attendance.settings import EngineSettings


def compare(container: Container, path: Path, month: str) -> list[str]:
    """Differences between the file's punches and the stored records, one line each."""

    result = container.parser.parse_file(path, path.name)
    resolver = EmployeeResolver(container.employees_repo.list_active())

    expected: dict[tuple[int, object], list] = defaultdict(list)
    unknown: set[str] = set()
    for punch in result.punches:
        if month_of(punch.work_date) != month or not container.calendar.is_working_day(punch.work_date):
            continue
        emp = resolver.resolve(punch.employee_code)
        if emp is None:
            unknown.add(punch.employee_code)
            continue
        expected[(emp.employee_id, punch.work_date)].append(punch.punch_time)

    stored = {r.key: r for r in container.attendance_repo.list_month(month)}

    problems = [f"unknown employee code {code}" for code in sorted(unknown)]
    for (employee_id, day), times in sorted(expected.items()):
        rec = stored.get((employee_id, day))
        if rec is None:
            problems.append(f"employee {employee_id} {day}: missing from database")
            continue
        distinct = sorted(set(times))
        clock_in = distinct[0]
        clock_out = distinct[-1] if len(distinct) > 1 else None
        if (rec.clock_in, rec.clock_out) != (clock_in, clock_out):
            problems.append(
                f"employee {employee_id} {day}: file {format_time(clock_in)}-{format_time(clock_out)} "
                f"db {format_time(rec.clock_in)}-{format_time(rec.clock_out)}"
            )
    return problems


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Verify stored attendance against a device export")
    ap.add_argument("file", type=Path)
    ap.add_argument("month")
    args = ap.parse_args(argv)

    load_dotenv(override=False)
    engine = EngineSettings.from_module(importlib.import_module(get_settings_module()))
    container = build_container(db_config=engine.db_config, engine=engine)

    problems = compare(container, args.file, require_month(args.month))
    if not problems:
        print(f"OK: {args.file.name} matches stored records for {args.month}")
        return 0
    for line in problems:
        print(line)
    print(f"{len(problems)} difference(s)")
    return 1


if __name__ == "__main__":
    sys.exit(main())
