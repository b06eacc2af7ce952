from datetime import date
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Response, status
from sqlalchemy.orm import Session

from timetrack.core.clock import get_today
from timetrack.db.session import get_session

from . import repository, service
from .aggregation import rollup
from .schemas import (
    BatchResultOut,
    DayRecordOut,
    MonthRecordOut,
    RosterEntryOut,
    SummaryRowOut,
    SummaryTotalsOut,
)
from .upsert import MAX_ID
from .validity import ViewMode

router = APIRouter(prefix="/time-tracking", tags=["time-tracking"])


def _check_period(year: int, month: int) -> None:
    if not 1 <= year <= 9999 or not 0 <= month <= 11:
        raise HTTPException(status_code=400, detail="Invalid request parameters")


@router.get("/summary/{year}/{month}", response_model=list[SummaryRowOut])
def get_month_summary(
    year: int,
    month: int,
    db: Session = Depends(get_session),
    today: date = Depends(get_today),
) -> list[SummaryRowOut]:
    _check_period(year, month)
    return [SummaryRowOut.from_row(row) for row in service.summary_rows(db, year, month, today)]


@router.get("/summary/{year}/{month}/totals", response_model=SummaryTotalsOut)
def get_month_totals(
    year: int,
    month: int,
    db: Session = Depends(get_session),
    today: date = Depends(get_today),
) -> SummaryTotalsOut:
    _check_period(year, month)
    return SummaryTotalsOut.from_totals(rollup(service.summary_rows(db, year, month, today)))


@router.get("/{year}/{month}/mode/{mode}", response_model=list[RosterEntryOut])
def get_month_with_mode(
    year: int,
    month: int,
    mode: str,
    db: Session = Depends(get_session),
    today: date = Depends(get_today),
) -> list[RosterEntryOut]:
    _check_period(year, month)
    try:
        view_mode = ViewMode(mode)
    except ValueError:
        raise HTTPException(
            status_code=400, detail='Invalid mode parameter. Must be "display" or "edit"'
        ) from None

    roster = service.build_roster(db, year, month, view_mode, today)
    return [RosterEntryOut.from_month(entry) for entry in roster]


@router.get("/{year}/{month}/employees/{employee_id}", response_model=list[DayRecordOut])
def get_employee_day_records(
    year: int,
    month: int,
    employee_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_session),
) -> list[DayRecordOut]:
    _check_period(year, month)
    if repository.get_employee(db, employee_id) is None:
        raise HTTPException(status_code=404, detail="Employee not found")
    records = service.employee_day_records(db, employee_id, year, month)
    return [DayRecordOut(day=record.day, hours=float(record.hours)) for record in records]


@router.get("/{year}/{month}", response_model=list[MonthRecordOut])
def get_month_records(year: int, month: int, db: Session = Depends(get_session)) -> list[MonthRecordOut]:
    _check_period(year, month)
    return [
        MonthRecordOut(
            id=record.id,
            employeeId=record.employee_id,
            employeeName=employee_name,
            year=record.year,
            month=record.month,
            day=record.day,
            hours=float(record.hours),
        )
        for record, employee_name in repository.month_records(db, year, month)
    ]


@router.post("", response_model=BatchResultOut)
def save_time_records(
    response: Response,
    records: list[Any] = Body(...),
    db: Session = Depends(get_session),
    today: date = Depends(get_today),
) -> BatchResultOut:
    batch = service.save_batch(db, records, today)
    if not batch.success:
        response.status_code = status.HTTP_207_MULTI_STATUS
    return BatchResultOut.from_batch(batch)
