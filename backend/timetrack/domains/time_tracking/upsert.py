"""Batch validation for incoming hours entries.

Each item is judged on its own; a rejected item never stops the rest of the
batch. Items go through three gates, in order:

* structure: identifiers present and in range, hours present
  (``invalid_parameters``);
* business rules: employee exists (``employee_not_found``), the day exists in
  the month and the cell is editable (``business_rule_violation``);
* persistence: the storage upsert may still refuse an item, for example
  hours outside [0, 12] (``persistence_error``).
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from numbers import Real
from typing import Any, Callable, Iterable, Optional

from .month_calendar import days_in_month, to_date
from .validity import ViewMode, classify

MIN_YEAR = 2000
MAX_YEAR = 2100
MIN_HOURS = 0
MAX_HOURS = 12
HOURS_DECIMALS = 2
# upper bound of the 32-bit integer id columns
MAX_ID = 2**31 - 1


class ErrorKind(str, Enum):
    INVALID_PARAMETERS = "invalid_parameters"
    BUSINESS_RULE_VIOLATION = "business_rule_violation"
    EMPLOYEE_NOT_FOUND = "employee_not_found"
    PERSISTENCE_ERROR = "persistence_error"


class BatchStatus(str, Enum):
    OK = "ok"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(frozen=True)
class RecordWrite:
    employee_id: int
    year: int
    month: int
    day: int
    hours: float


@dataclass(frozen=True)
class UpsertOutcome:
    success: bool
    error_message: Optional[str] = None


@dataclass(frozen=True)
class ItemOutcome:
    employee_id: Any
    year: Any
    month: Any
    day: Any
    hours: Any
    status: str
    reason: Optional[ErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, write: RecordWrite) -> "ItemOutcome":
        return cls(
            employee_id=write.employee_id,
            year=write.year,
            month=write.month,
            day=write.day,
            hours=write.hours,
            status="success",
        )

    @classmethod
    def error(cls, item: Any, reason: ErrorKind, message: str) -> "ItemOutcome":
        fields = item if isinstance(item, dict) else {}
        hours = fields.get("hours")
        return cls(
            employee_id=fields.get("employeeId"),
            year=fields.get("year"),
            month=fields.get("month"),
            day=fields.get("day"),
            hours=hours if hours is not None else 0,
            status="error",
            reason=reason,
            message=message,
        )


@dataclass
class BatchResult:
    results: list[ItemOutcome] = field(default_factory=list)
    errors: list[ItemOutcome] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def status(self) -> BatchStatus:
        if not self.errors:
            return BatchStatus.OK
        if self.results:
            return BatchStatus.PARTIAL
        return BatchStatus.FAILED


def _as_number(value: Any) -> Optional[float]:
    # bool is an int subclass but never a valid id or hours value
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    if not math.isfinite(value):
        return None
    return value


def _as_int(value: Any) -> Optional[int]:
    number = _as_number(value)
    if number is None or int(number) != number:
        return None
    return int(number)


def _as_hours(value: Any) -> Optional[float]:
    number = _as_number(value)
    if number is None:
        return None
    # stored with two decimals; round here so the response matches what is kept
    return round(float(number), HOURS_DECIMALS)


def parse_write(item: Any) -> Optional[RecordWrite]:
    """Return the typed write, or None when the item is structurally invalid."""
    if not isinstance(item, dict):
        return None
    employee_id = _as_int(item.get("employeeId"))
    year = _as_int(item.get("year"))
    month = _as_int(item.get("month"))
    day = _as_int(item.get("day"))
    hours = _as_hours(item.get("hours"))
    if employee_id is None or not 1 <= employee_id <= MAX_ID:
        return None
    if year is None or not MIN_YEAR <= year <= MAX_YEAR:
        return None
    if month is None or not 0 <= month <= 11:
        return None
    if day is None or not 1 <= day <= 31:
        return None
    if hours is None:
        return None
    return RecordWrite(employee_id=employee_id, year=year, month=month, day=day, hours=hours)


def business_rule_violation(write: RecordWrite, employee, today: date) -> Optional[str]:
    """Message describing why the cell may not be written, or None."""
    if write.day > days_in_month(write.year, write.month):
        return f"Day {write.day} does not exist in month {write.month} of {write.year}"
    result = classify(employee, to_date(write.year, write.month, write.day), today, ViewMode.EDIT)
    if not result.editable:
        return f"Cell is not editable: {result.status.value}"
    return None


def hours_in_range(hours: float) -> bool:
    return MIN_HOURS <= hours <= MAX_HOURS


def process_batch(
    items: Iterable[Any],
    *,
    find_employee: Callable[[int], Any],
    upsert: Callable[[RecordWrite], UpsertOutcome],
    today: date,
) -> BatchResult:
    batch = BatchResult()
    for item in items:
        write = parse_write(item)
        if write is None:
            batch.errors.append(
                ItemOutcome.error(item, ErrorKind.INVALID_PARAMETERS, "Invalid parameters")
            )
            continue

        employee = find_employee(write.employee_id)
        if employee is None:
            batch.errors.append(
                ItemOutcome.error(item, ErrorKind.EMPLOYEE_NOT_FOUND, "Employee not found")
            )
            continue

        violation = business_rule_violation(write, employee, today)
        if violation:
            batch.errors.append(
                ItemOutcome.error(item, ErrorKind.BUSINESS_RULE_VIOLATION, violation)
            )
            continue

        outcome = upsert(write)
        if outcome.success:
            batch.results.append(ItemOutcome.success(write))
        else:
            batch.errors.append(
                ItemOutcome.error(
                    item,
                    ErrorKind.PERSISTENCE_ERROR,
                    outcome.error_message or "Failed to update record",
                )
            )
    return batch
