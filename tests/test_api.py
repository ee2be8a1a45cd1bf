import io

import pytest

from hr_attendance.main import create_app
from hr_attendance.settings import EngineSettings

HEADER = ["AC-No.", "Name", "Date", "Clock In", "Clock Out"]


@pytest.fixture
def client(container):
    app = create_app(EngineSettings(log_level="WARNING"), container=container)
    app.config["TESTING"] = True
    return app.test_client()


def _files(xlsx, *named_rows):
    return {"attendanceFiles": [(io.BytesIO(xlsx([HEADER, *rows])), name) for name, rows in named_rows]}


def test_upload_then_report(client, xlsx):
    resp = client.post(
        "/api/attendance/upload",
        data=_files(
            xlsx,
            ("alice.xlsx", [["101", "Alice", "2025-01-06", "10:15", "19:40"]]),
            ("bob.xlsx", [["102", "Bob", "2025-01-06", "10:00", None], ["102", "Bob", "bad", "10:00", None]]),
        ),
        content_type="multipart/form-data",
    )

    assert resp.status_code == 200
    results = resp.get_json()["results"]
    assert results["processedFiles"] == 2
    assert results["totalFiles"] == 2
    assert results["failedRecords"] == 1
    assert results["savedRecords"] == 2

    report = client.get("/api/attendance/monthly-report/2025-01").get_json()
    assert report["totalEmployees"] == 2
    alice = report["report"][0]
    assert alice["user"]["name"] == "Alice Adams"
    assert alice["records"][0]["status"] == "late"
    assert alice["stats"]["totalMinutesLate"] == 15

    detail = client.get("/api/attendance/employee/2/2025-01").get_json()
    assert detail["records"][0]["fingerprintMissType"] == "clock_out"

    assert client.get("/api/attendance/months").get_json() == {"months": ["2025-01"]}


def test_upload_without_files_is_a_bad_request(client):
    resp = client.post("/api/attendance/upload", data={}, content_type="multipart/form-data")

    assert resp.status_code == 400
    assert resp.get_json()["msg"] == "No files uploaded"


def test_upload_over_the_cap_is_a_bad_request(client, xlsx):
    named = [(f"f{i}.xlsx", [["101", "Alice", "2025-01-06", "10:00", "19:00"]]) for i in range(11)]

    resp = client.post("/api/attendance/upload", data=_files(xlsx, *named), content_type="multipart/form-data")

    assert resp.status_code == 400


def test_invalid_month_is_a_bad_request(client):
    resp = client.get("/api/attendance/monthly-report/2025-13")

    assert resp.status_code == 400
    assert resp.get_json() == {"msg": "Invalid month format. Use YYYY-MM"}
    assert client.post("/api/attendance/reclassify/jan").status_code == 400


def test_unknown_employee_is_not_found(client):
    resp = client.get("/api/attendance/employee/99/2025-01")

    assert resp.status_code == 404


def test_reclassify_endpoint(client, xlsx):
    client.post(
        "/api/attendance/upload",
        data=_files(xlsx, ("alice.xlsx", [["101", "Alice", "2025-01-06", "10:15", "19:40"]])),
        content_type="multipart/form-data",
    )

    resp = client.post("/api/attendance/reclassify/2025-01")

    assert resp.status_code == 200
    assert resp.get_json() == {"month": "2025-01", "reclassified": 2}
