"""Monthly totals built on top of the day-cell rules in ``validity``.

Rosters, per-employee summaries and the global summary all run through
``summarize_employee`` so they agree on what counts as a working day.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Mapping, Optional

from .validity import DayCell, EmploymentWindow, ViewMode, classify_month


@dataclass
class EmployeeMonth:
    employee_id: int
    employee_name: str
    start_date: date
    end_date: Optional[date]
    total_hours: float
    working_days: int
    cells: list[DayCell] = field(default_factory=list)

    @property
    def average_hours(self) -> Optional[float]:
        return average(self.total_hours, self.working_days)


@dataclass(frozen=True)
class SummaryRow:
    employee_id: int
    employee_name: str
    working_days: int
    total_hours: float

    @property
    def average_hours(self) -> Optional[float]:
        return average(self.total_hours, self.working_days)


@dataclass(frozen=True)
class SummaryTotals:
    total_hours: float
    working_days: int
    average_hours: Optional[float]


def average(total_hours: float, working_days: int) -> Optional[float]:
    if working_days <= 0:
        return None
    return total_hours / working_days


def summarize_employee(
    employee,
    year: int,
    month: int,
    today: date,
    hours_by_day: Mapping[int, float] | None = None,
    mode: ViewMode | str = ViewMode.DISPLAY,
) -> EmployeeMonth:
    window = EmploymentWindow.of(employee)
    cells = classify_month(window, year, month, today, mode, hours_by_day)
    countable = [cell for cell in cells if cell.countable]
    return EmployeeMonth(
        employee_id=employee.id,
        employee_name=employee.name,
        start_date=window.start_date,
        end_date=window.end_date,
        total_hours=float(sum(cell.hours for cell in countable)),
        working_days=len(countable),
        cells=cells,
    )


def resolve_roster(
    employees: Iterable,
    records_by_employee: Mapping[int, Mapping[int, float]],
    year: int,
    month: int,
    mode: ViewMode | str,
    today: date,
) -> list[EmployeeMonth]:
    """Employees to show for a month.

    Display mode keeps employees with at least one countable entry; edit mode
    keeps everyone whose employment window touches the month.
    """
    mode = ViewMode(mode)
    roster = []
    for employee in employees:
        if mode is ViewMode.EDIT and not EmploymentWindow.of(employee).overlaps_month(year, month):
            continue
        summary = summarize_employee(
            employee, year, month, today, records_by_employee.get(employee.id), mode
        )
        if mode is ViewMode.DISPLAY and summary.working_days == 0:
            continue
        roster.append(summary)
    return roster


def monthly_summary(
    employees: Iterable,
    records_by_employee: Mapping[int, Mapping[int, float]],
    year: int,
    month: int,
    today: date,
) -> list[SummaryRow]:
    """One row per employee employed at some point during the month."""
    rows = []
    for employee in employees:
        if not EmploymentWindow.of(employee).overlaps_month(year, month):
            continue
        summary = summarize_employee(
            employee, year, month, today, records_by_employee.get(employee.id)
        )
        rows.append(
            SummaryRow(
                employee_id=summary.employee_id,
                employee_name=summary.employee_name,
                working_days=summary.working_days,
                total_hours=summary.total_hours,
            )
        )
    return rows


def rollup(rows: Iterable[SummaryRow]) -> SummaryTotals:
    rows = list(rows)
    total_hours = float(sum(row.total_hours for row in rows))
    working_days = sum(row.working_days for row in rows)
    return SummaryTotals(
        total_hours=total_hours,
        working_days=working_days,
        average_hours=average(total_hours, working_days),
    )
