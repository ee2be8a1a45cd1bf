import pytest

from hr_attendance.core.exceptions import FileFormatError
from hr_attendance.ingestion.headers import HeaderAliasTable, normalize_header


def test_normalize_header_ignores_case_and_punctuation():
    assert normalize_header("AC-No.") == normalize_header("ac no") == normalize_header("AC_NO") == "acno"
    assert normalize_header(None) == ""


def test_match_row_maps_common_device_headers():
    columns = HeaderAliasTable().match_row(["AC-No.", "Name", "Date", "Clock In", "Clock Out"])

    assert (columns.code, columns.name, columns.date, columns.clock_in, columns.clock_out) == (0, 1, 2, 3, 4)
    assert columns.datetime is None
    assert columns.is_usable


def test_match_row_prefers_specific_code_alias_over_generic_id():
    columns = HeaderAliasTable().match_row(["ID", "Employee Code", "Date/Time"])

    assert columns.code == 1
    assert columns.datetime == 2
    assert columns.is_usable


def test_detect_skips_title_rows_above_header():
    rows = [
        ["Attendance Report 01/01/2025 - 31/01/2025", None, None],
        [None, None, None],
        ["Emp No", "Work Date", "Time"],
        ["101", "2025-01-06", "10:00"],
    ]

    index, columns = HeaderAliasTable().detect(rows, scan_rows=15)

    assert index == 2
    assert columns.describe(rows[index]) == {"code": "Emp No", "date": "Work Date", "clock_in": "Time"}


def test_detect_without_required_columns_is_a_file_error():
    rows = [["Name", "Department"], ["Alice", "Engineering"]]

    with pytest.raises(FileFormatError):
        HeaderAliasTable().detect(rows, scan_rows=15)


def test_custom_aliases_replace_defaults_for_a_field():
    table = HeaderAliasTable({"code": ["Payroll Number"]})

    columns = table.match_row(["Payroll Number", "Date", "In"])
    assert columns.code == 0
    assert not table.match_row(["Employee Code", "Date", "In"]).is_usable


def test_unknown_alias_field_is_rejected():
    with pytest.raises(ValueError):
        HeaderAliasTable({"badge_colour": ["Colour"]})
