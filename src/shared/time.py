from __future__ import annotations

from datetime import date, timedelta
from math import ceil
from typing import Tuple

from src.core.errors import BadRequestError

DAYS_PER_WEEK = 7


def year_bounds(year: int) -> Tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def default_week_end(week_start: date) -> date:
    return week_start + timedelta(days=DAYS_PER_WEEK - 1)


def week_of_month(value: date) -> int:
    """Week number of the month a date falls in: days 1-7 -> 1, 8-14 -> 2, ..., 29-31 -> 5."""
    return ceil(value.day / DAYS_PER_WEEK)


def is_same_month(value: date, as_of: date) -> bool:
    return value.year == as_of.year and value.month == as_of.month


def parse_date_range(start_date: date | None, end_date: date | None) -> Tuple[date | None, date | None]:
    if (start_date is None) != (end_date is None):
        raise BadRequestError("start_date and end_date must be supplied together")
    if start_date and end_date and start_date > end_date:
        raise BadRequestError("start_date must not be after end_date")
    return start_date, end_date
