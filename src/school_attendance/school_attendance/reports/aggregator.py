from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..attendance.model import AttendanceDetailRow, StudentMonthCounts
from ..common.datetime_utils import month_name
from ..core.enums import AttendanceStatus
from ..students.model import Student

logger = logging.getLogger(__name__)


@dataclass
class StatusTally:
    """Mutable accumulator for the four status buckets."""

    hadir: int = 0
    sakit: int = 0
    ijin: int = 0
    alfa: int = 0

    def add(self, status: AttendanceStatus, count: int = 1) -> None:
        setattr(self, status.value, getattr(self, status.value) + int(count))

    def merge(self, other: "StatusTally") -> None:
        for status in AttendanceStatus:
            self.add(status, getattr(other, status.value))

    @property
    def total_recorded(self) -> int:
        return self.hadir + self.sakit + self.ijin + self.alfa

    @property
    def percentage(self) -> float:
        total = self.total_recorded
        return self.hadir / total if total > 0 else 0.0

    def to_dict(self) -> dict:
        return {
            "hadir": self.hadir,
            "sakit": self.sakit,
            "ijin": self.ijin,
            "alfa": self.alfa,
            "total_recorded": self.total_recorded,
        }

    @classmethod
    def from_counts(cls, row: StudentMonthCounts) -> "StatusTally":
        tally = cls(hadir=row.hadir, sakit=row.sakit, ijin=row.ijin, alfa=row.alfa)
        if row.total_recorded != tally.total_recorded:
            logger.warning(
                "Student %s has %d marks with an unrecognized status; excluded from counts",
                row.student_id,
                row.total_recorded - tally.total_recorded,
            )
        return tally


@dataclass(frozen=True)
class StudentSummary:
    id: int
    nis: str
    full_name: str
    class_name: str
    hadir: int
    sakit: int
    ijin: int
    alfa: int
    total_recorded: int
    percentage: float

    @classmethod
    def build(cls, student: Student, tally: StatusTally) -> "StudentSummary":
        return cls(
            id=student.student_id,
            nis=student.nis,
            full_name=student.full_name,
            class_name=student.class_name,
            hadir=tally.hadir,
            sakit=tally.sakit,
            ijin=tally.ijin,
            alfa=tally.alfa,
            total_recorded=tally.total_recorded,
            percentage=tally.percentage,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nis": self.nis,
            "full_name": self.full_name,
            "class_name": self.class_name,
            "hadir": self.hadir,
            "sakit": self.sakit,
            "ijin": self.ijin,
            "alfa": self.alfa,
            "total_recorded": self.total_recorded,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class MonthCounts:
    year: int
    month: int
    tally: StatusTally

    @property
    def month_name(self) -> str:
        return month_name(self.month)

    def to_dict(self) -> dict:
        return {"year": self.year, "month": self.month, "month_name": self.month_name, **self.tally.to_dict()}


@dataclass(frozen=True)
class MonthlyBreakdown:
    id: int
    nis: str
    full_name: str
    class_name: str
    months: tuple[MonthCounts, ...]
    totals: StatusTally

    @property
    def percentage(self) -> float:
        return self.totals.percentage

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nis": self.nis,
            "full_name": self.full_name,
            "class_name": self.class_name,
            "months": [m.to_dict() for m in self.months],
            "totals": self.totals.to_dict(),
            "percentage": self.percentage,
        }

    def flatten(self) -> list[dict]:
        """One row per month, shaped for the monthly detail sheet."""
        return [
            {
                "nis": self.nis,
                "full_name": self.full_name,
                "class_name": self.class_name,
                "year": m.year,
                "month_name": m.month_name,
                **m.tally.to_dict(),
                "percentage": m.tally.percentage,
            }
            for m in self.months
        ]


def _roster_order(roster: Iterable[Student]) -> list[Student]:
    return sorted(roster, key=lambda s: (s.full_name.casefold(), s.nis))


class AttendanceAggregator:
    """Reshape attendance rows into per-student summaries.

    Every method is defined over the roster: each active student appears
    exactly once, with zero counts when no rows matched. Rows for students
    outside the roster are ignored.
    """

    def summarize_marks(
        self,
        roster: Sequence[Student],
        marks: Iterable[AttendanceDetailRow],
    ) -> list[StudentSummary]:
        tallies: dict[int, StatusTally] = {s.student_id: StatusTally() for s in roster}
        unknown = 0

        for mark in marks:
            tally = tallies.get(mark.student_id)
            if tally is None:
                continue
            status = AttendanceStatus.parse(mark.status)
            if status is None:
                unknown += 1
                continue
            tally.add(status)

        if unknown:
            logger.warning("Skipped %d attendance marks with an unrecognized status", unknown)

        return [StudentSummary.build(s, tallies[s.student_id]) for s in _roster_order(roster)]

    def summarize_counts(
        self,
        roster: Sequence[Student],
        rows: Iterable[StudentMonthCounts],
    ) -> list[StudentSummary]:
        tallies: dict[int, StatusTally] = {s.student_id: StatusTally() for s in roster}

        for row in rows:
            tally = tallies.get(row.student_id)
            if tally is not None:
                tally.merge(StatusTally.from_counts(row))

        return [StudentSummary.build(s, tallies[s.student_id]) for s in _roster_order(roster)]

    def breakdown_by_month(
        self,
        roster: Sequence[Student],
        rows: Iterable[StudentMonthCounts],
        months: Sequence[tuple[int, int]],
    ) -> list[MonthlyBreakdown]:
        """Nest per-(year, month) counts under each student.

        Every student gets one entry for each month in `months`, in that
        order, zero-filled where the store returned nothing. `totals` is the
        element-wise sum of the entries.
        """
        wanted = set(months)
        grid: dict[int, dict[tuple[int, int], StatusTally]] = {
            s.student_id: {ym: StatusTally() for ym in months} for s in roster
        }

        for row in rows:
            per_month = grid.get(row.student_id)
            if per_month is None or row.year is None or row.month is None:
                continue
            key = (row.year, row.month)
            if key not in wanted:
                logger.debug("Ignoring counts for %s outside requested months", key)
                continue
            per_month[key].merge(StatusTally.from_counts(row))

        out: list[MonthlyBreakdown] = []
        for s in _roster_order(roster):
            entries = tuple(MonthCounts(year=y, month=m, tally=grid[s.student_id][(y, m)]) for y, m in months)
            totals = StatusTally()
            for entry in entries:
                totals.merge(entry.tally)
            out.append(
                MonthlyBreakdown(
                    id=s.student_id,
                    nis=s.nis,
                    full_name=s.full_name,
                    class_name=s.class_name,
                    months=entries,
                    totals=totals,
                )
            )
        return out

