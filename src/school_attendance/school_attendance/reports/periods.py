"""Report request shapes.

A report request is exactly one of DateRange, SingleMonth or MonthRange.
`parse_report_request` builds and validates it once, at the HTTP boundary,
before any query is issued.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterator, Mapping, Optional, Union

from ..common.datetime_utils import first_day_of_month, format_long_date, format_month_year, last_day_of_month
from ..common.validators import optional_int, require_date, require_int
from ..core.constants import MAX_REPORT_MONTHS, MAX_REPORT_YEAR, MIN_REPORT_YEAR
from ..core.exceptions import InvalidRange, InvalidRequestShape, ValidationError

_TRUTHY = {"true", "1", "yes", "on"}


@dataclass(frozen=True)
class DateRange:
    start_date: date
    end_date: date
    class_id: Optional[int] = None

    def describe(self) -> str:
        return f"Periode: {format_long_date(self.start_date)} hingga {format_long_date(self.end_date)}"

    def to_dict(self) -> dict:
        return {
            "start_date": self.start_date.strftime("%Y-%m-%d"),
            "end_date": self.end_date.strftime("%Y-%m-%d"),
        }


@dataclass(frozen=True)
class SingleMonth:
    class_id: int
    month: int
    year: int

    @property
    def start_date(self) -> date:
        return first_day_of_month(self.year, self.month)

    @property
    def end_date(self) -> date:
        return last_day_of_month(self.year, self.month)

    def describe(self) -> str:
        return f"Bulan: {format_month_year(self.year, self.month)}"

    def to_dict(self) -> dict:
        return {"month": self.month, "year": self.year}


@dataclass(frozen=True)
class MonthRange:
    class_id: int
    start_month: int
    start_year: int
    end_month: int
    end_year: int
    detailed: bool = False

    @property
    def start_date(self) -> date:
        return first_day_of_month(self.start_year, self.start_month)

    @property
    def end_date(self) -> date:
        return last_day_of_month(self.end_year, self.end_month)

    @property
    def is_single_month(self) -> bool:
        return (self.start_year, self.start_month) == (self.end_year, self.end_month)

    def iter_months(self) -> Iterator[tuple[int, int]]:
        """Yield (year, month) for every calendar month in range, oldest first."""
        year, month = self.start_year, self.start_month
        while (year, month) <= (self.end_year, self.end_month):
            yield year, month
            month += 1
            if month > 12:
                year, month = year + 1, 1

    def describe(self) -> str:
        if self.is_single_month:
            return f"Bulan: {format_month_year(self.start_year, self.start_month)}"
        return (
            f"Periode: {format_month_year(self.start_year, self.start_month)} "
            f"hingga {format_month_year(self.end_year, self.end_month)}"
        )

    def to_dict(self) -> dict:
        return {
            "start": f"{self.start_year}-{self.start_month:02d}",
            "end": f"{self.end_year}-{self.end_month:02d}",
            "start_month": self.start_month,
            "start_year": self.start_year,
            "end_month": self.end_month,
            "end_year": self.end_year,
        }


ReportPeriod = Union[DateRange, SingleMonth, MonthRange]


def _present(params: Mapping[str, Any], *names: str) -> bool:
    for name in names:
        value = params.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            return False
    return True


def _month(params: Mapping[str, Any], field_name: str) -> int:
    value = require_int(params.get(field_name), field_name)
    if value < 1 or value > 12:
        raise InvalidRange("Month must be between 1-12", field=field_name)
    return value


def _year(params: Mapping[str, Any], field_name: str) -> int:
    value = require_int(params.get(field_name), field_name)
    if value < MIN_REPORT_YEAR or value > MAX_REPORT_YEAR:
        raise ValidationError(
            f"{field_name} must be between {MIN_REPORT_YEAR}-{MAX_REPORT_YEAR}", field=field_name
        )
    return value


def parse_month_range(params: Mapping[str, Any]) -> MonthRange:
    if not _present(params, "class_id", "start_month", "start_year", "end_month", "end_year"):
        raise InvalidRequestShape(
            "Class ID, start month, start year, end month, and end year are required"
        )

    start_month = _month(params, "start_month")
    end_month = _month(params, "end_month")
    start_year = _year(params, "start_year")
    end_year = _year(params, "end_year")

    if (start_year, start_month) > (end_year, end_month):
        raise InvalidRange("Start period cannot be greater than end period", field="start_month")
    span = (end_year - start_year) * 12 + (end_month - start_month) + 1
    if span > MAX_REPORT_MONTHS:
        raise InvalidRange(f"Month range cannot exceed {MAX_REPORT_MONTHS} months", field="end_year")

    detailed = str(params.get("detailed") or "").strip().lower() in _TRUTHY
    return MonthRange(
        class_id=require_int(params.get("class_id"), "class_id"),
        start_month=start_month,
        start_year=start_year,
        end_month=end_month,
        end_year=end_year,
        detailed=detailed,
    )


def parse_single_month(params: Mapping[str, Any]) -> SingleMonth:
    if not _present(params, "class_id", "month", "year"):
        raise InvalidRequestShape("Class ID, month, and year are required")

    return SingleMonth(
        class_id=require_int(params.get("class_id"), "class_id"),
        month=_month(params, "month"),
        year=_year(params, "year"),
    )


def parse_date_range(params: Mapping[str, Any]) -> DateRange:
    if not _present(params, "start_date", "end_date"):
        raise InvalidRequestShape("Start date and end date are required")

    start = require_date(params.get("start_date"), "start_date")
    end = require_date(params.get("end_date"), "end_date")
    if start > end:
        raise InvalidRange("Start date cannot be after end date", field="start_date")

    return DateRange(start_date=start, end_date=end, class_id=optional_int(params.get("class_id"), "class_id"))


def parse_report_request(params: Mapping[str, Any]) -> ReportPeriod:
    """Pick the report mode from the supplied parameters.

    First match wins: month-range, then single-month, then date-range.
    """
    if _present(params, "start_month", "start_year", "end_month", "end_year", "class_id"):
        return parse_month_range(params)
    if _present(params, "month", "year", "class_id"):
        return parse_single_month(params)
    if _present(params, "start_date", "end_date"):
        return parse_date_range(params)

    raise InvalidRequestShape(
        "Incomplete parameters. Use one of: "
        "(start_date & end_date), "
        "(month & year & class_id), "
        "(start_month & start_year & end_month & end_year & class_id)"
    )
