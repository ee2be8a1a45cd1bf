from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.classifier import DailyClassifier
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.policy import AttendancePolicy
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.model import WorkSchedule
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .ingestion.headers import HeaderAliasTable
from .ingestion.parser import AttendanceFileParser
from .ingestion.service import IngestionService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.reconciliation import LeaveReconciliationService
from .leaves.repository import LeaveRepository
from .reporting.service import MonthlyReportService
from .settings import EngineSettings
from .workdays.calendar import WorkCalendar


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    leaves_repo: LeaveRepository
    attendance_repo: AttendanceRepository

    parser: AttendanceFileParser
    classifier: DailyClassifier
    calendar: WorkCalendar
    leave_service: LeaveReconciliationService
    ingestion_service: IngestionService
    attendance_service: AttendanceService
    report_service: MonthlyReportService

    conn: Optional[DatabaseConnection] = None


def build_policy(engine: EngineSettings) -> AttendancePolicy:
    return AttendancePolicy(
        grace_minutes=engine.late_grace_minutes,
        clock_in_miss_deduction=engine.fingerprint_deduction_clock_in,
        clock_out_miss_deduction=engine.fingerprint_deduction_clock_out,
    )


def build_services(
    *,
    employees_repo: EmployeeRepository,
    leaves_repo: LeaveRepository,
    attendance_repo: AttendanceRepository,
    engine: Optional[EngineSettings] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any repository implementation (MySQL or in-memory)."""

    engine = engine or EngineSettings()

    parser = AttendanceFileParser(HeaderAliasTable(engine.header_aliases), dayfirst=engine.date_dayfirst)
    classifier = DailyClassifier(build_policy(engine))
    calendar = WorkCalendar.from_settings(weekend_days=engine.weekend_days, holidays=engine.holidays)
    leave_service = LeaveReconciliationService(leaves_repo)

    ingestion_service = IngestionService(
        parser=parser,
        employees=employees_repo,
        attendance=attendance_repo,
        leaves=leave_service,
        classifier=classifier,
        calendar=calendar,
        max_files=engine.max_upload_files,
        workers=engine.parse_workers,
    )
    attendance_service = AttendanceService(attendance_repo, employees_repo, leave_service, classifier=classifier)
    report_service = MonthlyReportService(attendance_repo, employees_repo, leave_service)

    return Container(
        employees_repo=employees_repo,
        leaves_repo=leaves_repo,
        attendance_repo=attendance_repo,
        parser=parser,
        classifier=classifier,
        calendar=calendar,
        leave_service=leave_service,
        ingestion_service=ingestion_service,
        attendance_service=attendance_service,
        report_service=report_service,
        conn=conn,
    )


def build_container(*, db_config: dict, engine: Optional[EngineSettings] = None) -> Container:
    engine = engine or EngineSettings(db_config=db_config)
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    default_schedule = WorkSchedule(start_time=engine.default_work_start, end_time=engine.default_work_end)

    return build_services(
        employees_repo=MySQLEmployeeRepository(conn, default_schedule=default_schedule),
        leaves_repo=MySQLLeaveRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        engine=engine,
        conn=conn,
    )
