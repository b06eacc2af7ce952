from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel

from .aggregation import EmployeeMonth, SummaryRow, SummaryTotals
from .upsert import BatchResult, BatchStatus, ItemOutcome
from .validity import CellStatus


class DayRecordOut(BaseModel):
    day: int
    hours: float


class DayCellOut(BaseModel):
    day: int
    isWeekend: bool
    status: CellStatus
    editable: bool
    hours: float | None = None


class RosterEntryOut(BaseModel):
    employeeId: int
    employeeName: str
    startDate: date
    endDate: date | None = None
    totalHours: float
    workingDays: int
    timeRecords: list[DayRecordOut]
    cells: list[DayCellOut]

    @classmethod
    def from_month(cls, summary: EmployeeMonth) -> "RosterEntryOut":
        return cls(
            employeeId=summary.employee_id,
            employeeName=summary.employee_name,
            startDate=summary.start_date,
            endDate=summary.end_date,
            totalHours=summary.total_hours,
            workingDays=summary.working_days,
            timeRecords=[
                DayRecordOut(day=cell.day, hours=cell.hours)
                for cell in summary.cells
                if cell.hours is not None
            ],
            cells=[
                DayCellOut(
                    day=cell.day,
                    isWeekend=cell.is_weekend,
                    status=cell.status,
                    editable=cell.editable,
                    hours=cell.hours,
                )
                for cell in summary.cells
            ],
        )


class MonthRecordOut(BaseModel):
    id: int
    employeeId: int
    employeeName: str
    year: int
    month: int
    day: int
    hours: float


class SummaryRowOut(BaseModel):
    employee_id: int
    employee_name: str
    working_days: int
    total_hours: float
    average_hours: float | None = None

    @classmethod
    def from_row(cls, row: SummaryRow) -> "SummaryRowOut":
        return cls(
            employee_id=row.employee_id,
            employee_name=row.employee_name,
            working_days=row.working_days,
            total_hours=row.total_hours,
            average_hours=row.average_hours,
        )


class SummaryTotalsOut(BaseModel):
    total_hours: float
    working_days: int
    average_hours: float | None = None

    @classmethod
    def from_totals(cls, totals: SummaryTotals) -> "SummaryTotalsOut":
        return cls(
            total_hours=totals.total_hours,
            working_days=totals.working_days,
            average_hours=totals.average_hours,
        )


class BatchItemOut(BaseModel):
    employeeId: Any = None
    year: Any = None
    month: Any = None
    day: Any = None
    hours: Any = None
    status: str
    reason: str | None = None
    message: str | None = None

    @classmethod
    def from_outcome(cls, outcome: ItemOutcome) -> "BatchItemOut":
        return cls(
            employeeId=outcome.employee_id,
            year=outcome.year,
            month=outcome.month,
            day=outcome.day,
            hours=outcome.hours,
            status=outcome.status,
            reason=outcome.reason.value if outcome.reason else None,
            message=outcome.message,
        )


class BatchResultOut(BaseModel):
    results: list[BatchItemOut]
    errors: list[BatchItemOut]
    success: bool
    status: BatchStatus

    @classmethod
    def from_batch(cls, batch: BatchResult) -> "BatchResultOut":
        return cls(
            results=[BatchItemOut.from_outcome(item) for item in batch.results],
            errors=[BatchItemOut.from_outcome(item) for item in batch.errors],
            success=batch.success,
            status=batch.status,
        )
