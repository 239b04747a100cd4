from __future__ import annotations

import calendar
from datetime import date, datetime

from ..core.constants import MONTH_NAMES


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def first_day_of_month(year: int, month: int) -> date:
    return date(year, month, 1)


def last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]


def format_long_date(value: date) -> str:
    """01 January 2024"""
    return f"{value.day:02d} {month_name(value.month)} {value.year}"


def format_month_year(year: int, month: int) -> str:
    return f"{month_name(month)} {year}"
