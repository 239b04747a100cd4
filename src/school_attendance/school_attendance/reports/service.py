from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..classes.model import SchoolClass
from ..classes.repository import ClassRepository
from ..common.datetime_utils import format_long_date
from ..core.constants import XLSX_MIMETYPE
from ..core.exceptions import NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from ..users.model import CurrentUser
from .aggregator import AttendanceAggregator
from .columns import (
    DAILY_COLUMNS,
    DATE_RANGE_DETAIL_COLUMNS,
    DATE_RANGE_SUMMARY_COLUMNS,
    MONTH_SUMMARY_COLUMNS,
    MONTHLY_DETAIL_COLUMNS,
)
from .periods import DateRange, MonthRange, ReportPeriod, SingleMonth
from .workbook import ExcelReportBuilder, SheetSpec

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[\\/:*?\"<>|\s]+")


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    mimetype: str = XLSX_MIMETYPE


def _filename_part(value: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", value.strip()) or "-"


class ReportService:
    """Use case: attendance reports as JSON or .xlsx downloads.

    Scope rules:
    - Secretary is pinned to their own class; asking for another class is Forbidden.
    - Admin may name any class, or none (date-range only) to span all classes.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        classes: ClassRepository,
        *,
        aggregator: Optional[AttendanceAggregator] = None,
        builder: Optional[ExcelReportBuilder] = None,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes
        self._aggregator = aggregator or AttendanceAggregator()
        self._builder = builder or ExcelReportBuilder()

    # ----- scope -----

    def resolve_class_scope(self, user: CurrentUser, requested_class_id: Optional[int]) -> Optional[int]:
        return user.class_scope(requested_class_id)

    def _require_class(self, class_id: Optional[int]) -> SchoolClass:
        if class_id is None:
            raise ValidationError("Class ID is required", field="class_id")
        school_class = self._classes.get_by_id(class_id)
        if not school_class:
            raise NotFoundError(f"Class with ID {class_id} not found")
        return school_class

    def _roster(self, class_id: Optional[int]) -> Sequence[Student]:
        return self._students.list_active(class_id)

    # ----- JSON -----

    def build_report(self, user: CurrentUser, period: ReportPeriod) -> dict:
        class_id = self.resolve_class_scope(user, period.class_id)

        if isinstance(period, MonthRange):
            self._require_class(class_id)
            if period.detailed:
                data = [b.to_dict() for b in self._month_breakdown(class_id, period)]
            else:
                data = [s.to_dict() for s in self._month_range_summary(class_id, period)]
            result = {"period": period.to_dict(), "data": data}
        elif isinstance(period, SingleMonth):
            self._require_class(class_id)
            data = [s.to_dict() for s in self._single_month_summary(class_id, period)]
            result = {"period": period.to_dict(), "data": data}
        else:
            if class_id is not None:
                self._require_class(class_id)
            marks = self._attendance.get_by_date_range(period.start_date, period.end_date, class_id)
            summary = self._aggregator.summarize_marks(self._roster(class_id), marks)
            result = {
                "period": period.to_dict(),
                "data": [m.to_dict() for m in marks],
                "summary": [s.to_dict() for s in summary],
            }

        logger.info(
            "Built %s report for class=%s (%d rows)",
            type(period).__name__,
            class_id if class_id is not None else "all",
            len(result["data"]),
        )
        return result

    def _month_range_summary(self, class_id: int, period: MonthRange):
        rows = self._attendance.get_month_range_counts(class_id, period.start_date, period.end_date)
        return self._aggregator.summarize_counts(self._roster(class_id), rows)

    def _month_breakdown(self, class_id: int, period: MonthRange):
        rows = self._attendance.get_detailed_month_range(class_id, period.start_date, period.end_date)
        return self._aggregator.breakdown_by_month(self._roster(class_id), rows, list(period.iter_months()))

    def _single_month_summary(self, class_id: int, period: SingleMonth):
        rows = self._attendance.get_monthly_counts(class_id, period.month, period.year)
        return self._aggregator.summarize_counts(self._roster(class_id), rows)

    # ----- downloads -----

    def export(self, user: CurrentUser, period: ReportPeriod) -> ExportFile:
        if isinstance(period, MonthRange):
            return self.export_month_range(user, period)
        if isinstance(period, SingleMonth):
            return self.export_single_month(user, period)
        return self.export_date_range(user, period)

    def export_daily(self, user: CurrentUser, *, attendance_date: date, class_id: Optional[int]) -> ExportFile:
        school_class = self._require_class(self.resolve_class_scope(user, class_id))
        class_name = school_class.class_name

        marks = self._attendance.get_by_date_range(attendance_date, attendance_date, school_class.class_id)
        if not marks:
            raise NotFoundError(f"No attendance data found for class {class_name} on {attendance_date:%Y-%m-%d}")

        content = self._builder.build(
            SheetSpec(
                rows=[m.to_dict() for m in marks],
                columns=DAILY_COLUMNS,
                sheet_name=f"Absensi Harian {attendance_date:%Y-%m-%d}",
                title=f"Laporan Absensi Harian Kelas {class_name}",
                subtitle=f"Tanggal: {format_long_date(attendance_date)}",
            )
        )
        filename = f"Laporan_Absensi_Harian_{_filename_part(class_name)}_{attendance_date:%Y-%m-%d}.xlsx"
        return self._done(filename, content, len(marks))

    def export_date_range(self, user: CurrentUser, period: DateRange) -> ExportFile:
        class_id = self.resolve_class_scope(user, period.class_id)
        class_name = self._require_class(class_id).class_name if class_id is not None else ""

        marks = self._attendance.get_by_date_range(period.start_date, period.end_date, class_id)
        if not marks:
            scope = f" for class {class_name}" if class_name else ""
            raise NotFoundError(
                f"No attendance data found for the date range {period.start_date:%Y-%m-%d} "
                f"to {period.end_date:%Y-%m-%d}{scope}"
            )
        summary = self._aggregator.summarize_marks(self._roster(class_id), marks)

        title = f"Persentase Kehadiran kelas : {class_name}" if class_name else "Laporan Absensi Rentang Tanggal"
        subtitle = period.describe()
        content = self._builder.build_with_summary(
            SheetSpec(rows=[m.to_dict() for m in marks], columns=DATE_RANGE_DETAIL_COLUMNS, title=title, subtitle=subtitle),
            SheetSpec(
                rows=[s.to_dict() for s in summary],
                columns=DATE_RANGE_SUMMARY_COLUMNS,
                title=title.replace("Laporan Absensi", "Rekapitulasi Absensi"),
                subtitle=subtitle,
            ),
        )

        filename = f"Laporan_Absensi_Tanggal_{period.start_date:%Y-%m-%d}_{period.end_date:%Y-%m-%d}"
        if class_name:
            filename += f"_Kelas_{_filename_part(class_name)}"
        return self._done(f"{filename}.xlsx", content, len(marks))

    def export_month_range(self, user: CurrentUser, period: MonthRange) -> ExportFile:
        school_class = self._require_class(self.resolve_class_scope(user, period.class_id))
        class_name = school_class.class_name
        span = f"{period.start_month}-{period.start_year}_{period.end_month}-{period.end_year}"
        sheet_span = f"{period.start_month}-{period.start_year} sd {period.end_month}-{period.end_year}"

        if period.detailed:
            rows = [row for b in self._month_breakdown(school_class.class_id, period) for row in b.flatten()]
            columns = MONTHLY_DETAIL_COLUMNS
            title = f"Laporan Absensi Detail Bulanan Kelas {class_name}"
            sheet_name = f"Detail Bulanan {sheet_span}"
            prefix = "Laporan_Absensi_Detail_Bulan_Range"
        else:
            rows = [s.to_dict() for s in self._month_range_summary(school_class.class_id, period)]
            columns = MONTH_SUMMARY_COLUMNS
            title = f"Persentase Kehadiran kelas : {class_name}"
            sheet_name = f"Ringkasan Bulanan {sheet_span}"
            prefix = "Laporan_Absensi_Bulan_Range"

        if not rows:
            raise NotFoundError(
                f"No attendance data found for the month range {period.start_month}/{period.start_year} "
                f"to {period.end_month}/{period.end_year} for class {class_name}"
            )

        content = self._builder.build(
            SheetSpec(rows=rows, columns=columns, sheet_name=sheet_name, title=title, subtitle=period.describe())
        )
        return self._done(f"{prefix}_{_filename_part(class_name)}_{span}.xlsx", content, len(rows))

    def export_single_month(self, user: CurrentUser, period: SingleMonth) -> ExportFile:
        school_class = self._require_class(self.resolve_class_scope(user, period.class_id))
        class_name = school_class.class_name

        rows = [s.to_dict() for s in self._single_month_summary(school_class.class_id, period)]
        if not rows:
            raise NotFoundError(
                f"No attendance data found for {period.month}/{period.year} for class {class_name}"
            )

        content = self._builder.build(
            SheetSpec(
                rows=rows,
                columns=MONTH_SUMMARY_COLUMNS,
                sheet_name=f"Ringkasan Bulanan {period.month}-{period.year}",
                title=f"Persentase Kehadiran kelas : {class_name}",
                subtitle=period.describe(),
            )
        )
        filename = f"Laporan_Absensi_Bulan_{_filename_part(class_name)}_{period.month}-{period.year}.xlsx"
        return self._done(filename, content, len(rows))

    @staticmethod
    def _done(filename: str, content: bytes, row_count: int) -> ExportFile:
        logger.info("Exported %s (%d rows, %d bytes)", filename, row_count, len(content))
        return ExportFile(filename=filename, content=content)
