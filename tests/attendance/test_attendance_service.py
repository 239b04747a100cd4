from __future__ import annotations

from datetime import date

import pytest

from src.school_attendance.school_attendance.attendance.service import AttendanceService
from src.school_attendance.school_attendance.core.enums import Role
from src.school_attendance.school_attendance.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from src.school_attendance.school_attendance.users.model import CurrentUser
from tests.fakes import CLASSES, STUDENTS, FakeAttendanceRepo, FakeClassRepo, FakeStudentRepo, Mark

ADMIN = CurrentUser(user_id=1, role=Role.ADMIN)
SECRETARY = CurrentUser(user_id=2, role=Role.SECRETARY, class_id=1)


@pytest.fixture
def attendance():
    return FakeAttendanceRepo(STUDENTS, [Mark(11, date(2024, 1, 3), "sakit", "demam")])


@pytest.fixture
def svc(attendance):
    return AttendanceService(attendance, FakeStudentRepo(STUDENTS), FakeClassRepo(CLASSES))


def test_record_batch_upserts_every_mark(svc, attendance):
    count = svc.record_batch(
        SECRETARY,
        [{"student_id": 11, "status": "hadir"}, {"student_id": "12", "status": "ijin", "notes": " acara keluarga "}],
        attendance_date=date(2024, 1, 3),
    )

    assert count == 2
    marks = {m.student_id: m for m in attendance.marks}
    assert marks[11].status == "hadir"
    assert marks[11].notes is None
    assert marks[12].notes == "acara keluarga"
    assert marks[12].recorded_by == 2
    assert len(attendance.marks) == 2


def test_record_batch_defaults_to_today(svc, attendance, monkeypatch):
    monkeypatch.setattr(
        "src.school_attendance.school_attendance.attendance.service.today_local", lambda: date(2024, 5, 2)
    )

    svc.record_batch(ADMIN, [{"student_id": 21, "status": "alfa"}])

    assert attendance.marks[-1].attendance_date == date(2024, 5, 2)


@pytest.mark.parametrize("payload", [None, [], {"student_id": 11, "status": "hadir"}])
def test_record_batch_requires_non_empty_list(svc, payload):
    with pytest.raises(ValidationError) as exc:
        svc.record_batch(ADMIN, payload)

    assert exc.value.field == "attendances"


def test_invalid_status_writes_nothing(svc, attendance):
    with pytest.raises(ValidationError) as exc:
        svc.record_batch(
            ADMIN,
            [{"student_id": 11, "status": "hadir"}, {"student_id": 12, "status": "present"}],
            attendance_date=date(2024, 1, 3),
        )

    assert exc.value.field == "status"
    assert attendance.calls == []


def test_secretary_cannot_record_other_class(svc, attendance):
    with pytest.raises(AuthorizationError):
        svc.record_batch(SECRETARY, [{"student_id": 21, "status": "hadir"}])

    assert attendance.calls == []


@pytest.mark.parametrize("student_id", [999, 14])
def test_unknown_or_inactive_student_is_not_found(svc, student_id):
    with pytest.raises(NotFoundError):
        svc.record_batch(ADMIN, [{"student_id": student_id, "status": "hadir"}])


def test_daily_roster_includes_unmarked_students(svc):
    rows = svc.get_daily(SECRETARY, attendance_date=date(2024, 1, 3), class_id=None)

    assert [r.nis for r in rows] == ["1002", "1001", "1003"]
    budi = rows[1]
    assert (budi.status, budi.notes) == ("sakit", "demam")
    assert rows[0].status is None


def test_daily_for_other_class_is_forbidden(svc):
    with pytest.raises(AuthorizationError):
        svc.get_daily(SECRETARY, attendance_date=date(2024, 1, 3), class_id=2)


def test_daily_unknown_class_is_not_found(svc):
    with pytest.raises(NotFoundError):
        svc.get_daily(ADMIN, attendance_date=date(2024, 1, 3), class_id=42)
