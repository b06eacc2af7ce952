from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from timetrack.models.employee import Employee
from timetrack.models.time_record import TimeRecord

from .upsert import MAX_HOURS, MIN_HOURS, RecordWrite, UpsertOutcome, hours_in_range


def list_employees(db: Session) -> list[Employee]:
    return db.query(Employee).order_by(Employee.name.asc(), Employee.id.asc()).all()


def get_employee(db: Session, employee_id: int) -> Optional[Employee]:
    return db.query(Employee).filter(Employee.id == employee_id).one_or_none()


def hours_by_employee(
    db: Session, year: int, month: int, employee_ids: Iterable[int] | None = None
) -> dict[int, dict[int, float]]:
    query = db.query(TimeRecord.employee_id, TimeRecord.day, TimeRecord.hours).filter(
        TimeRecord.year == year, TimeRecord.month == month
    )
    if employee_ids is not None:
        query = query.filter(TimeRecord.employee_id.in_(list(employee_ids)))

    grouped: dict[int, dict[int, float]] = defaultdict(dict)
    for employee_id, day, hours in query:
        grouped[employee_id][day] = float(hours)
    return dict(grouped)


def day_records(db: Session, employee_id: int, year: int, month: int) -> list[TimeRecord]:
    return (
        db.query(TimeRecord)
        .filter(
            TimeRecord.employee_id == employee_id,
            TimeRecord.year == year,
            TimeRecord.month == month,
        )
        .order_by(TimeRecord.day.asc())
        .all()
    )


def month_records(db: Session, year: int, month: int) -> list[tuple[TimeRecord, str]]:
    return (
        db.query(TimeRecord, Employee.name)
        .join(Employee, TimeRecord.employee_id == Employee.id)
        .filter(TimeRecord.year == year, TimeRecord.month == month)
        .order_by(Employee.name.asc(), TimeRecord.employee_id.asc(), TimeRecord.day.asc())
        .all()
    )


def upsert_record(db: Session, write: RecordWrite) -> UpsertOutcome:
    """Insert or update the record keyed on (employee, year, month, day)."""
    if not hours_in_range(write.hours):
        return UpsertOutcome(
            success=False,
            error_message=f"Hours must be between {MIN_HOURS} and {MAX_HOURS}",
        )

    record = (
        db.query(TimeRecord)
        .filter(
            TimeRecord.employee_id == write.employee_id,
            TimeRecord.year == write.year,
            TimeRecord.month == write.month,
            TimeRecord.day == write.day,
        )
        .one_or_none()
    )
    if record is None:
        record = TimeRecord(
            employee_id=write.employee_id,
            year=write.year,
            month=write.month,
            day=write.day,
            hours=write.hours,
        )
        db.add(record)
    else:
        record.hours = write.hours
    # the session does not autoflush; a repeated key later in the batch must see this row
    db.flush()
    return UpsertOutcome(success=True)
