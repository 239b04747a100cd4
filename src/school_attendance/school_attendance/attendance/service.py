from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from ..classes.repository import ClassRepository
from ..common.datetime_utils import today_local
from ..common.validators import require_int
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from ..users.model import CurrentUser
from .model import AttendanceRecord, DailyAttendanceRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        classes: ClassRepository,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes

    def get_daily(self, user: CurrentUser, *, attendance_date: date, class_id: Optional[int]) -> list[DailyAttendanceRow]:
        class_id = user.class_scope(class_id)
        if class_id is None:
            raise ValidationError("Class ID is required", field="class_id")
        if not self._classes.get_by_id(class_id):
            raise NotFoundError(f"Class with ID {class_id} not found")
        return list(self._attendance.get_by_class_and_date(class_id, attendance_date))

    def record_batch(
        self,
        user: CurrentUser,
        attendances: Any,
        *,
        attendance_date: Optional[date] = None,
    ) -> int:
        """Validate every mark, then upsert them all.

        Nothing is written when any item is invalid or out of the caller's class.
        """
        if not isinstance(attendances, list) or not attendances:
            raise ValidationError("Attendance data must be a non-empty array", field="attendances")

        attendance_date = attendance_date or today_local()
        records = [self._to_record(user, item, attendance_date) for item in attendances]

        for record in records:
            self._attendance.upsert(record)

        logger.info(
            "Recorded %d attendance marks for %s by user %s",
            len(records),
            attendance_date.isoformat(),
            user.user_id,
        )
        return len(records)

    def _to_record(self, user: CurrentUser, item: Any, attendance_date: date) -> AttendanceRecord:
        if not isinstance(item, dict):
            raise ValidationError("Each attendance entry must be an object", field="attendances")

        student_id = require_int(item.get("student_id"), "student_id")
        status = AttendanceStatus.parse(item.get("status"))
        if status is None:
            raise ValidationError(
                "Status must be one of: " + ", ".join(s.value for s in AttendanceStatus),
                field="status",
            )

        student = self._students.get_by_id(student_id)
        if not student or not student.is_active:
            raise NotFoundError(f"Student with ID {student_id} not found")
        user.class_scope(student.class_id)

        notes = str(item.get("notes") or "").strip()
        return AttendanceRecord(
            student_id=student_id,
            attendance_date=attendance_date,
            status=status,
            recorded_by=user.user_id,
            notes=notes or None,
        )
