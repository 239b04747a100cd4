from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .classes.mysql_class_repository import MySQLClassRepository
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .students.mysql_student_repository import MySQLStudentRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    classes_repo: MySQLClassRepository
    students_repo: MySQLStudentRepository
    attendance_repo: MySQLAttendanceRepository

    attendance_service: AttendanceService
    report_service: ReportService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    classes_repo = MySQLClassRepository(conn)
    students_repo = MySQLStudentRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    attendance_service = AttendanceService(attendance_repo, students_repo, classes_repo)
    report_service = ReportService(attendance_repo, students_repo, classes_repo)

    return Container(
        conn=conn,
        classes_repo=classes_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
        report_service=report_service,
    )
