from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for report scoping."""

    ADMIN = "admin"
    SECRETARY = "secretary"


class AttendanceStatus(str, Enum):
    """Attendance codes as stored in the database."""

    PRESENT = "hadir"
    SICK = "sakit"
    EXCUSED = "ijin"
    ABSENT = "alfa"

    @classmethod
    def parse(cls, value: object) -> "AttendanceStatus | None":
        try:
            return cls(value)
        except ValueError:
            return None


class ColumnFormat(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    PERCENTAGE = "percentage"
