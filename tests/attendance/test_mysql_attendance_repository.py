from __future__ import annotations

from datetime import date

from src.school_attendance.school_attendance.attendance.mysql_attendance_repository import (
    MySQLAttendanceRepository,
)


class RecordingCursor:
    def __init__(self, rows):
        self._rows = rows
        self.executed = []

    def execute(self, sql, params=None):
        self.executed.append((" ".join(sql.split()), params))

    def fetchall(self):
        return self._rows

    def close(self):
        pass


class FakeConn:
    def __init__(self, cursor):
        self._cursor = cursor

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


class FakeFactory:
    def __init__(self, cursor):
        self._cursor = cursor

    def connect(self):
        return FakeConn(self._cursor)


def _row(**overrides):
    row = {
        "attendance_id": 5,
        "student_id": 11,
        "attendance_date": date(2024, 1, 31),
        "status": "hadir",
        "notes": None,
        "recorded_by": 2,
        "full_name": "Budi Santoso",
        "nis": 1001,
        "class_name": "X IPA 1",
        "recorded_by_name": "Sekretaris",
    }
    row.update(overrides)
    return row


def test_date_range_filters_inclusive_bounds_on_active_students():
    cur = RecordingCursor([_row()])
    repo = MySQLAttendanceRepository(FakeFactory(cur))

    rows = repo.get_by_date_range(date(2024, 1, 1), date(2024, 1, 31), 1)

    sql, params = cur.executed[0]
    assert "a.attendance_date BETWEEN %s AND %s" in sql
    assert "s.is_active = TRUE" in sql
    assert "s.class_id = %s" in sql
    assert params == (date(2024, 1, 1), date(2024, 1, 31), 1)
    assert rows[0].nis == "1001"
    assert rows[0].attendance_date == date(2024, 1, 31)


def test_date_range_without_class_binds_only_the_bounds():
    cur = RecordingCursor([])
    repo = MySQLAttendanceRepository(FakeFactory(cur))

    assert repo.get_by_date_range(date(2024, 2, 1), date(2024, 2, 29)) == []

    sql, params = cur.executed[0]
    assert "s.class_id = %s" not in sql
    assert params == (date(2024, 2, 1), date(2024, 2, 29))


def test_single_month_counts_use_calendar_month_bounds():
    cur = RecordingCursor([])
    repo = MySQLAttendanceRepository(FakeFactory(cur))

    repo.get_monthly_counts(1, 2, 2024)

    sql, params = cur.executed[0]
    assert "a.attendance_date BETWEEN %s AND %s" in sql
    assert params == (date(2024, 2, 1), date(2024, 2, 29), 1)
