from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..core.constants import DEFAULT_COLUMN_WIDTH
from ..core.enums import ColumnFormat


class ReportField(str, Enum):
    """Row keys a report column may read."""

    ATTENDANCE_DATE = "attendance_date"
    NIS = "nis"
    FULL_NAME = "full_name"
    CLASS_NAME = "class_name"
    STATUS = "status"
    NOTES = "notes"
    RECORDED_BY_NAME = "recorded_by_name"
    YEAR = "year"
    MONTH_NAME = "month_name"
    HADIR = "hadir"
    SAKIT = "sakit"
    IJIN = "ijin"
    ALFA = "alfa"
    TOTAL_RECORDED = "total_recorded"
    PERCENTAGE = "percentage"


@dataclass(frozen=True)
class ColumnSpec:
    key: ReportField
    label: str
    width: int = DEFAULT_COLUMN_WIDTH
    format: ColumnFormat = ColumnFormat.TEXT


def _counts() -> tuple[ColumnSpec, ...]:
    return (
        ColumnSpec(ReportField.HADIR, "Hadir", 10, ColumnFormat.NUMBER),
        ColumnSpec(ReportField.SAKIT, "Sakit", 10, ColumnFormat.NUMBER),
        ColumnSpec(ReportField.IJIN, "Ijin", 10, ColumnFormat.NUMBER),
        ColumnSpec(ReportField.ALFA, "Alfa", 10, ColumnFormat.NUMBER),
        ColumnSpec(ReportField.TOTAL_RECORDED, "Total", 10, ColumnFormat.NUMBER),
    )


DAILY_COLUMNS = (
    ColumnSpec(ReportField.ATTENDANCE_DATE, "Tanggal Absensi", 20, ColumnFormat.DATE),
    ColumnSpec(ReportField.NIS, "NIS", 15),
    ColumnSpec(ReportField.FULL_NAME, "Nama Lengkap", 30),
    ColumnSpec(ReportField.STATUS, "Status", 15),
    ColumnSpec(ReportField.NOTES, "Catatan", 40),
    ColumnSpec(ReportField.RECORDED_BY_NAME, "Dicatat Oleh", 25),
)

DATE_RANGE_DETAIL_COLUMNS = (
    ColumnSpec(ReportField.ATTENDANCE_DATE, "Tanggal Absensi", 20, ColumnFormat.DATE),
    ColumnSpec(ReportField.NIS, "NIS", 15),
    ColumnSpec(ReportField.FULL_NAME, "Nama Lengkap", 30),
    ColumnSpec(ReportField.CLASS_NAME, "Kelas", 15),
    ColumnSpec(ReportField.STATUS, "Status", 15),
    ColumnSpec(ReportField.NOTES, "Catatan", 40),
    ColumnSpec(ReportField.RECORDED_BY_NAME, "Dicatat Oleh", 25),
)

DATE_RANGE_SUMMARY_COLUMNS = (
    ColumnSpec(ReportField.NIS, "NIS", 15),
    ColumnSpec(ReportField.FULL_NAME, "Nama Siswa", 30),
    ColumnSpec(ReportField.CLASS_NAME, "Kelas", 15),
    *_counts(),
    ColumnSpec(ReportField.PERCENTAGE, "Persentase Kehadiran", 20, ColumnFormat.PERCENTAGE),
)

MONTH_SUMMARY_COLUMNS = (
    ColumnSpec(ReportField.NIS, "NIS", 15),
    ColumnSpec(ReportField.FULL_NAME, "Nama Siswa", 25),
    *_counts(),
    ColumnSpec(ReportField.PERCENTAGE, "Persentase", 15, ColumnFormat.PERCENTAGE),
)

MONTHLY_DETAIL_COLUMNS = (
    ColumnSpec(ReportField.NIS, "NIS", 15),
    ColumnSpec(ReportField.FULL_NAME, "Nama Siswa", 25),
    ColumnSpec(ReportField.YEAR, "Tahun", 10, ColumnFormat.NUMBER),
    ColumnSpec(ReportField.MONTH_NAME, "Bulan", 15),
    *_counts(),
    ColumnSpec(ReportField.PERCENTAGE, "Persentase", 15, ColumnFormat.PERCENTAGE),
)
