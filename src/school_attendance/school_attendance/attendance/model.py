from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark (write model).

    At most one exists per (student_id, attendance_date).
    """

    student_id: int
    attendance_date: date
    status: AttendanceStatus
    recorded_by: int
    notes: Optional[str] = None


@dataclass(frozen=True)
class DailyAttendanceRow:
    """Roster row for one class and day, with the mark if one was recorded."""

    student_id: int
    nis: str
    full_name: str
    class_name: str
    status: Optional[str] = None
    notes: Optional[str] = None
    attendance_id: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AttendanceDetailRow:
    """Read-model: a recorded mark joined with display names."""

    attendance_id: int
    student_id: int
    nis: str
    full_name: str
    class_name: str
    attendance_date: date
    status: str
    notes: Optional[str] = None
    recorded_by: Optional[int] = None
    recorded_by_name: Optional[str] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["attendance_date"] = self.attendance_date.strftime("%Y-%m-%d")
        return data


@dataclass(frozen=True)
class StudentMonthCounts:
    """Per-student status counts as returned by the grouped store queries.

    `year`/`month` are set only by the per-month query, and are None when the
    student has no marks in range (outer join).
    """

    student_id: int
    nis: str
    full_name: str
    class_name: str
    hadir: int = 0
    sakit: int = 0
    ijin: int = 0
    alfa: int = 0
    total_recorded: int = 0
    year: Optional[int] = None
    month: Optional[int] = None
