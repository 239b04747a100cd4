from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceDetailRow, AttendanceRecord, DailyAttendanceRow, StudentMonthCounts


class AttendanceRepository(Protocol):
    """Attendance store interface.

    All reads are restricted to active students and return rows already
    joined with student/class display names.
    """

    def upsert(self, record: AttendanceRecord) -> None:
        """Insert, or overwrite status/notes/recorded_by for the same student and date."""

        raise NotImplementedError

    def get_by_class_and_date(self, class_id: int, attendance_date: date) -> Sequence[DailyAttendanceRow]:
        raise NotImplementedError

    def get_by_date_range(
        self,
        start_date: date,
        end_date: date,
        class_id: Optional[int] = None,
    ) -> Sequence[AttendanceDetailRow]:
        raise NotImplementedError

    def get_monthly_counts(self, class_id: int, month: int, year: int) -> Sequence[StudentMonthCounts]:
        raise NotImplementedError

    def get_month_range_counts(self, class_id: int, start_date: date, end_date: date) -> Sequence[StudentMonthCounts]:
        raise NotImplementedError

    def get_detailed_month_range(self, class_id: int, start_date: date, end_date: date) -> Sequence[StudentMonthCounts]:
        """One row per (student, year, month) with marks in range."""

        raise NotImplementedError
