"""Employment-window rules for individual day cells.

A day cell is one (employee, calendar day) pair. ``classify`` assigns every
cell exactly one ``CellStatus``; the first matching rule wins:

1. weekend
2. future (strictly after today)
3. before_employment (strictly before start_date)
4. after_termination (end_date set and day strictly after it)
5. ok

Only ``ok`` cells are editable, and only in edit mode. Only ``ok`` cells with a
recorded hours value (a recorded 0 included) count towards monthly totals.
Cells in the other states still show whatever hours are stored for them.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Mapping, Optional

from .month_calendar import days_in_month, is_weekend_date, month_bounds, to_date


class CellStatus(str, Enum):
    WEEKEND = "weekend"
    FUTURE = "future"
    BEFORE_EMPLOYMENT = "before_employment"
    AFTER_TERMINATION = "after_termination"
    OK = "ok"


class ViewMode(str, Enum):
    DISPLAY = "display"
    EDIT = "edit"


def as_calendar_day(value: date | datetime) -> date:
    """Drop any time-of-day so comparisons happen on whole days."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class EmploymentWindow:
    start_date: date
    end_date: Optional[date] = None

    @classmethod
    def of(cls, employee) -> "EmploymentWindow":
        """Build from anything exposing ``start_date`` and ``end_date``."""
        if isinstance(employee, cls):
            return employee
        end_date = getattr(employee, "end_date", None)
        return cls(
            start_date=as_calendar_day(employee.start_date),
            end_date=as_calendar_day(end_date) if end_date is not None else None,
        )

    def covers(self, day: date) -> bool:
        day = as_calendar_day(day)
        if day < self.start_date:
            return False
        return self.end_date is None or day <= self.end_date

    def overlaps(self, first: date, last: date) -> bool:
        if self.start_date > last:
            return False
        return self.end_date is None or self.end_date >= first

    def overlaps_month(self, year: int, month: int) -> bool:
        return self.overlaps(*month_bounds(year, month))


@dataclass(frozen=True)
class CellClassification:
    status: CellStatus
    editable: bool
    countable: bool


@dataclass(frozen=True)
class DayCell:
    day: int
    is_weekend: bool
    status: CellStatus
    editable: bool
    countable: bool
    hours: Optional[float] = None


def cell_status(employee, day: date, today: date) -> CellStatus:
    window = EmploymentWindow.of(employee)
    day = as_calendar_day(day)
    if is_weekend_date(day):
        return CellStatus.WEEKEND
    if day > as_calendar_day(today):
        return CellStatus.FUTURE
    if day < window.start_date:
        return CellStatus.BEFORE_EMPLOYMENT
    if window.end_date is not None and day > window.end_date:
        return CellStatus.AFTER_TERMINATION
    return CellStatus.OK


def classify(
    employee,
    day: date,
    today: date,
    mode: ViewMode | str,
    hours: Optional[float] = None,
) -> CellClassification:
    status = cell_status(employee, day, today)
    is_ok = status is CellStatus.OK
    return CellClassification(
        status=status,
        editable=is_ok and ViewMode(mode) is ViewMode.EDIT,
        countable=is_ok and hours is not None,
    )


def classify_month(
    employee,
    year: int,
    month: int,
    today: date,
    mode: ViewMode | str,
    hours_by_day: Mapping[int, float] | None = None,
) -> list[DayCell]:
    hours_by_day = hours_by_day or {}
    window = EmploymentWindow.of(employee)
    cells = []
    for day in range(1, days_in_month(year, month) + 1):
        current = to_date(year, month, day)
        hours = hours_by_day.get(day)
        result = classify(window, current, today, mode, hours)
        cells.append(
            DayCell(
                day=day,
                is_weekend=is_weekend_date(current),
                status=result.status,
                editable=result.editable,
                countable=result.countable,
                hours=hours,
            )
        )
    return cells
