from __future__ import annotations

from datetime import date

import pytest

from src.school_attendance.school_attendance.core.exceptions import (
    InvalidRange,
    InvalidRequestShape,
    ValidationError,
)
from src.school_attendance.school_attendance.reports.periods import (
    DateRange,
    MonthRange,
    SingleMonth,
    parse_date_range,
    parse_month_range,
    parse_report_request,
)


def _month_range(**overrides):
    params = {"class_id": "1", "start_month": "1", "start_year": "2024", "end_month": "3", "end_year": "2024"}
    params.update(overrides)
    return params


def test_month_range_wins_over_other_shapes():
    params = _month_range(month="5", year="2024", start_date="2024-01-01", end_date="2024-01-31")

    period = parse_report_request(params)

    assert isinstance(period, MonthRange)
    assert period.start_date == date(2024, 1, 1)
    assert period.end_date == date(2024, 3, 31)


def test_single_month_wins_over_date_range():
    period = parse_report_request(
        {"class_id": "2", "month": "2", "year": "2024", "start_date": "2024-01-01", "end_date": "2024-01-31"}
    )

    assert period == SingleMonth(class_id=2, month=2, year=2024)
    assert period.end_date == date(2024, 2, 29)


def test_date_range_class_is_optional():
    period = parse_report_request({"start_date": "2024-01-01", "end_date": "2024-01-31"})

    assert period == DateRange(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31), class_id=None)


def test_month_without_class_falls_through_to_invalid_shape():
    with pytest.raises(InvalidRequestShape):
        parse_report_request({"month": "2", "year": "2024"})


def test_empty_params_are_invalid_shape():
    with pytest.raises(InvalidRequestShape):
        parse_report_request({})


def test_blank_values_count_as_missing():
    with pytest.raises(InvalidRequestShape):
        parse_report_request({"start_date": " ", "end_date": "2024-01-31"})


def test_month_out_of_range_is_invalid_range():
    with pytest.raises(InvalidRange) as exc:
        parse_report_request(_month_range(start_month="13"))

    assert exc.value.field == "start_month"


def test_start_after_end_is_invalid_range():
    with pytest.raises(InvalidRange):
        parse_month_range(_month_range(start_month="6", end_month="3"))


def test_year_boundary_is_ordered_by_year_first():
    period = parse_month_range(_month_range(start_month="11", start_year="2023", end_month="2", end_year="2024"))

    assert list(period.iter_months()) == [(2023, 11), (2023, 12), (2024, 1), (2024, 2)]


def test_date_range_start_after_end_is_invalid_range():
    with pytest.raises(InvalidRange):
        parse_date_range({"start_date": "2024-02-01", "end_date": "2024-01-31"})


def test_malformed_date_is_validation_error_with_field():
    with pytest.raises(ValidationError) as exc:
        parse_date_range({"start_date": "01/02/2024", "end_date": "2024-01-31"})

    assert exc.value.field == "start_date"


@pytest.mark.parametrize("flag, expected", [("true", True), ("1", True), ("false", False), (None, False)])
def test_detailed_flag(flag, expected):
    params = _month_range()
    if flag is not None:
        params["detailed"] = flag

    assert parse_month_range(params).detailed is expected


def test_describe_uses_single_month_label_when_range_covers_one_month():
    one = parse_month_range(_month_range(end_month="1"))
    many = parse_month_range(_month_range())

    assert one.describe() == "Bulan: January 2024"
    assert many.describe() == "Periode: January 2024 hingga March 2024"


def test_date_range_describe_and_dict():
    period = DateRange(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))

    assert period.describe() == "Periode: 01 January 2024 hingga 31 January 2024"
    assert period.to_dict() == {"start_date": "2024-01-01", "end_date": "2024-01-31"}


@pytest.mark.parametrize("field", ["start_year", "end_year"])
def test_month_range_year_beyond_calendar_is_validation_error(field):
    with pytest.raises(ValidationError) as exc:
        parse_report_request(_month_range(**{field: "10000"}))

    assert exc.value.field == field


def test_single_month_year_beyond_calendar_is_validation_error():
    with pytest.raises(ValidationError) as exc:
        parse_report_request({"class_id": "1", "month": "1", "year": "10000"})

    assert exc.value.field == "year"


def test_month_range_span_is_capped():
    assert parse_month_range(_month_range(start_month="1", start_year="2020", end_month="12", end_year="2024"))

    with pytest.raises(InvalidRange) as exc:
        parse_month_range(_month_range(start_month="1", start_year="2020", end_month="1", end_year="2025"))

    assert exc.value.field == "end_year"
