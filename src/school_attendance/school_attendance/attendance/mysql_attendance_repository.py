from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import first_day_of_month, last_day_of_month
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_int, db_cursor, fetchall
from .model import AttendanceDetailRow, AttendanceRecord, DailyAttendanceRow, StudentMonthCounts
from .repository import AttendanceRepository

# Only the four known codes are counted, so total_recorded always equals the bucket sum.
_COUNT_COLUMNS = """
    SUM(CASE WHEN a.status = 'hadir' THEN 1 ELSE 0 END) AS hadir,
    SUM(CASE WHEN a.status = 'sakit' THEN 1 ELSE 0 END) AS sakit,
    SUM(CASE WHEN a.status = 'ijin' THEN 1 ELSE 0 END) AS ijin,
    SUM(CASE WHEN a.status = 'alfa' THEN 1 ELSE 0 END) AS alfa,
    SUM(CASE WHEN a.status IN ('hadir', 'sakit', 'ijin', 'alfa') THEN 1 ELSE 0 END) AS total_recorded
"""


def _to_counts(r: dict) -> StudentMonthCounts:
    return StudentMonthCounts(
        student_id=int(r["id"]),
        nis=str(r["nis"]),
        full_name=r["full_name"],
        class_name=r["class_name"],
        hadir=as_int(r.get("hadir")),
        sakit=as_int(r.get("sakit")),
        ijin=as_int(r.get("ijin")),
        alfa=as_int(r.get("alfa")),
        total_recorded=as_int(r.get("total_recorded")),
        year=int(r["year"]) if r.get("year") is not None else None,
        month=int(r["month"]) if r.get("month") is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendances(student_id, attendance_date, status, notes, recorded_by)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status), notes=VALUES(notes), recorded_by=VALUES(recorded_by)
                """,
                (
                    int(record.student_id),
                    record.attendance_date,
                    record.status.value,
                    record.notes,
                    int(record.recorded_by),
                ),
            )

    def get_by_class_and_date(self, class_id: int, attendance_date: date) -> Sequence[DailyAttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.id AS student_id, s.full_name, s.student_id AS nis,
                       c.class_name, a.status, a.notes, a.id AS attendance_id
                FROM students s
                JOIN classes c ON s.class_id = c.id
                LEFT JOIN attendances a ON s.id = a.student_id AND a.attendance_date = %s
                WHERE s.class_id = %s AND s.is_active = TRUE
                ORDER BY s.full_name
                """,
                (attendance_date, int(class_id)),
            )
            return [
                DailyAttendanceRow(
                    student_id=int(r["student_id"]),
                    nis=str(r["nis"]),
                    full_name=r["full_name"],
                    class_name=r["class_name"],
                    status=r.get("status"),
                    notes=r.get("notes"),
                    attendance_id=int(r["attendance_id"]) if r.get("attendance_id") is not None else None,
                )
                for r in fetchall(cur)
            ]

    def get_by_date_range(
        self,
        start_date: date,
        end_date: date,
        class_id: Optional[int] = None,
    ) -> Sequence[AttendanceDetailRow]:
        clauses = ["a.attendance_date BETWEEN %s AND %s", "s.is_active = TRUE"]
        params: list[object] = [start_date, end_date]

        if class_id is not None:
            clauses.append("s.class_id = %s")
            params.append(int(class_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.id AS attendance_id, a.student_id, a.attendance_date, a.status, a.notes,
                       a.recorded_by, s.full_name, s.student_id AS nis, c.class_name,
                       u.full_name AS recorded_by_name
                FROM attendances a
                JOIN students s ON a.student_id = s.id
                JOIN classes c ON s.class_id = c.id
                LEFT JOIN users u ON a.recorded_by = u.id
                WHERE {where}
                ORDER BY a.attendance_date DESC, c.class_name, s.full_name
                """,
                tuple(params),
            )
            return [
                AttendanceDetailRow(
                    attendance_id=int(r["attendance_id"]),
                    student_id=int(r["student_id"]),
                    nis=str(r["nis"]),
                    full_name=r["full_name"],
                    class_name=r["class_name"],
                    attendance_date=r["attendance_date"],
                    status=r["status"],
                    notes=r.get("notes"),
                    recorded_by=int(r["recorded_by"]) if r.get("recorded_by") is not None else None,
                    recorded_by_name=r.get("recorded_by_name"),
                )
                for r in fetchall(cur)
            ]

    def get_monthly_counts(self, class_id: int, month: int, year: int) -> Sequence[StudentMonthCounts]:
        return self.get_month_range_counts(
            class_id,
            first_day_of_month(year, month),
            last_day_of_month(year, month),
        )

    def get_month_range_counts(self, class_id: int, start_date: date, end_date: date) -> Sequence[StudentMonthCounts]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.id, s.full_name, s.student_id AS nis, c.class_name,
                       {_COUNT_COLUMNS}
                FROM students s
                JOIN classes c ON s.class_id = c.id
                LEFT JOIN attendances a ON s.id = a.student_id
                    AND a.attendance_date BETWEEN %s AND %s
                WHERE s.class_id = %s AND s.is_active = TRUE
                GROUP BY s.id, s.full_name, s.student_id, c.class_name
                ORDER BY s.full_name
                """,
                (start_date, end_date, int(class_id)),
            )
            return [_to_counts(r) for r in fetchall(cur)]

    def get_detailed_month_range(self, class_id: int, start_date: date, end_date: date) -> Sequence[StudentMonthCounts]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.id, s.full_name, s.student_id AS nis, c.class_name,
                       YEAR(a.attendance_date) AS year,
                       MONTH(a.attendance_date) AS month,
                       {_COUNT_COLUMNS}
                FROM students s
                JOIN classes c ON s.class_id = c.id
                LEFT JOIN attendances a ON s.id = a.student_id
                    AND a.attendance_date BETWEEN %s AND %s
                WHERE s.class_id = %s AND s.is_active = TRUE
                GROUP BY s.id, s.full_name, s.student_id, c.class_name,
                         YEAR(a.attendance_date), MONTH(a.attendance_date)
                ORDER BY s.full_name, year, month
                """,
                (start_date, end_date, int(class_id)),
            )
            return [_to_counts(r) for r in fetchall(cur)]
