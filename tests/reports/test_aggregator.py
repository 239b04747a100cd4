from __future__ import annotations

import logging
from datetime import date

import pytest

from src.school_attendance.school_attendance.attendance.model import StudentMonthCounts
from src.school_attendance.school_attendance.reports.aggregator import AttendanceAggregator, StatusTally
from tests.fakes import STUDENTS, FakeAttendanceRepo, FakeStudentRepo, Mark


@pytest.fixture
def roster():
    return FakeStudentRepo(STUDENTS).list_active(1)


def _marks():
    return [
        Mark(11, date(2024, 1, 3), "hadir"),
        Mark(11, date(2024, 1, 4), "sakit"),
        Mark(11, date(2024, 2, 1), "hadir"),
        Mark(12, date(2024, 1, 3), "alfa"),
        Mark(12, date(2024, 3, 31), "ijin"),
        Mark(14, date(2024, 1, 3), "hadir"),
        Mark(21, date(2024, 1, 3), "hadir"),
    ]


def test_every_active_student_appears_once_even_without_marks(roster):
    repo = FakeAttendanceRepo(STUDENTS, _marks())
    rows = repo.get_by_date_range(date(2024, 1, 1), date(2024, 1, 31), 1)

    summary = AttendanceAggregator().summarize_marks(roster, rows)

    assert [s.nis for s in summary] == ["1002", "1001", "1003"]
    citra = summary[2]
    assert (citra.total_recorded, citra.percentage) == (0, 0.0)


def test_buckets_sum_to_total_and_percentage_is_ratio(roster):
    repo = FakeAttendanceRepo(STUDENTS, _marks())
    rows = repo.get_month_range_counts(1, date(2024, 1, 1), date(2024, 3, 31))

    summary = AttendanceAggregator().summarize_counts(roster, rows)

    for s in summary:
        assert s.hadir + s.sakit + s.ijin + s.alfa == s.total_recorded
    budi = next(s for s in summary if s.nis == "1001")
    assert (budi.hadir, budi.sakit, budi.total_recorded) == (2, 1, 3)
    assert budi.percentage == pytest.approx(2 / 3)


def test_percentage_ninety():
    tally = StatusTally(hadir=18, sakit=1, alfa=1)

    assert tally.total_recorded == 20
    assert tally.percentage == pytest.approx(0.9)


def test_range_edges_are_inclusive(roster):
    repo = FakeAttendanceRepo(STUDENTS, _marks())
    rows = repo.get_by_date_range(date(2024, 3, 31), date(2024, 3, 31), 1)

    summary = AttendanceAggregator().summarize_marks(roster, rows)

    ani = next(s for s in summary if s.nis == "1002")
    assert ani.ijin == 1


def test_month_totals_equal_sum_of_months(roster):
    repo = FakeAttendanceRepo(STUDENTS, _marks())
    months = [(2024, 1), (2024, 2), (2024, 3)]
    rows = repo.get_detailed_month_range(1, date(2024, 1, 1), date(2024, 3, 31))

    breakdown = AttendanceAggregator().breakdown_by_month(roster, rows, months)

    for b in breakdown:
        assert [(m.year, m.month) for m in b.months] == months
        for field in ("hadir", "sakit", "ijin", "alfa", "total_recorded"):
            assert getattr(b.totals, field) == sum(getattr(m.tally, field) for m in b.months)
    budi = next(b for b in breakdown if b.nis == "1001")
    assert budi.months[1].tally.hadir == 1
    assert budi.totals.total_recorded == 3


def test_single_month_breakdown_has_exactly_one_entry(roster):
    repo = FakeAttendanceRepo(STUDENTS, _marks())
    rows = repo.get_detailed_month_range(1, date(2024, 1, 1), date(2024, 1, 31))

    breakdown = AttendanceAggregator().breakdown_by_month(roster, rows, [(2024, 1)])

    assert len(breakdown) == 3
    for b in breakdown:
        assert len(b.months) == 1
        assert b.totals.to_dict() == b.months[0].tally.to_dict()


def test_flatten_gives_one_row_per_month(roster):
    breakdown = AttendanceAggregator().breakdown_by_month(roster, [], [(2023, 12), (2024, 1)])

    rows = breakdown[0].flatten()

    assert [(r["year"], r["month_name"]) for r in rows] == [(2023, "December"), (2024, "January")]
    assert rows[0]["percentage"] == 0.0


def test_inactive_and_foreign_students_are_ignored(roster):
    repo = FakeAttendanceRepo(STUDENTS, _marks())
    rows = repo.get_by_date_range(date(2024, 1, 1), date(2024, 1, 31), None)

    summary = AttendanceAggregator().summarize_marks(roster, rows)

    assert {s.id for s in summary} == {11, 12, 13}


def test_unknown_status_is_excluded_and_logged(roster, caplog):
    repo = FakeAttendanceRepo(STUDENTS, [Mark(11, date(2024, 1, 3), "hadir"), Mark(11, date(2024, 1, 4), "libur")])
    rows = repo.get_by_date_range(date(2024, 1, 1), date(2024, 1, 31), 1)

    with caplog.at_level(logging.WARNING):
        summary = AttendanceAggregator().summarize_marks(roster, rows)

    budi = next(s for s in summary if s.nis == "1001")
    assert (budi.hadir, budi.total_recorded, budi.percentage) == (1, 1, 1.0)
    assert "unrecognized status" in caplog.text


def test_counts_total_mismatch_keeps_bucket_sum(roster):
    row = StudentMonthCounts(
        student_id=11, nis="1001", full_name="Budi Santoso", class_name="X IPA 1", hadir=2, alfa=1, total_recorded=5
    )

    summary = AttendanceAggregator().summarize_counts(roster, [row])

    budi = next(s for s in summary if s.nis == "1001")
    assert budi.total_recorded == 3
