"""Calendar helpers keyed on (year, zero-based month).

Months are zero-based throughout the time-tracking API (0 = January,
11 = December), matching how records are stored.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

SATURDAY = 5
SUNDAY = 6


@dataclass(frozen=True)
class MonthDay:
    day: int
    is_weekend: bool


def _check_month(month: int) -> None:
    if not 0 <= month <= 11:
        raise ValueError(f"month must be between 0 and 11, got {month}")


def days_in_month(year: int, month: int) -> int:
    _check_month(month)
    return calendar.monthrange(year, month + 1)[1]


def to_date(year: int, month: int, day: int) -> date:
    _check_month(month)
    return date(year, month + 1, day)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of the month."""
    first = to_date(year, month, 1)
    return first, first + timedelta(days=days_in_month(year, month) - 1)


def is_weekend_date(value: date) -> bool:
    return value.weekday() in (SATURDAY, SUNDAY)


def is_weekend(year: int, month: int, day: int) -> bool:
    return is_weekend_date(to_date(year, month, day))


def enumerate_month(year: int, month: int) -> list[MonthDay]:
    return [
        MonthDay(day=day, is_weekend=is_weekend(year, month, day))
        for day in range(1, days_in_month(year, month) + 1)
    ]
