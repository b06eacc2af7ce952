from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Any, Iterable

from sqlalchemy.orm import Session

from timetrack.core.logging import get_logger
from timetrack.core.observability import records_rejected_counter, records_saved_counter, tracer
from timetrack.db.session import session_scope
from timetrack.models.time_record import TimeRecord

from . import repository
from .aggregation import EmployeeMonth, SummaryRow, monthly_summary, resolve_roster
from .upsert import BatchResult, process_batch
from .validity import ViewMode

logger = get_logger(__name__)


def build_roster(
    db: Session, year: int, month: int, mode: ViewMode, today: date
) -> list[EmployeeMonth]:
    employees = repository.list_employees(db)
    records = repository.hours_by_employee(db, year, month)
    roster = resolve_roster(employees, records, year, month, mode, today)
    logger.info(
        "roster_resolved", year=year, month=month, mode=mode.value, employees=len(roster)
    )
    return roster


def employee_day_records(db: Session, employee_id: int, year: int, month: int) -> list[TimeRecord]:
    return repository.day_records(db, employee_id, year, month)


def summary_rows(db: Session, year: int, month: int, today: date) -> list[SummaryRow]:
    employees = repository.list_employees(db)
    records = repository.hours_by_employee(db, year, month)
    return monthly_summary(employees, records, year, month, today)


def save_batch(db: Session, items: Iterable[Any], today: date) -> BatchResult:
    """Validate and persist a batch of hours entries in one transaction.

    Rejected items are reported in the result and the accepted ones are still
    committed. Any unexpected storage error rolls the whole batch back and
    propagates.
    """
    items = list(items)
    with tracer.start_as_current_span("time_records.save_batch") as span:
        span.set_attribute("batch.size", len(items))
        with session_scope(db) as session:
            batch = process_batch(
                items,
                find_employee=lambda employee_id: repository.get_employee(session, employee_id),
                upsert=lambda write: repository.upsert_record(session, write),
                today=today,
            )
        span.set_attribute("batch.errors", len(batch.errors))

    records_saved_counter.add(len(batch.results))
    for reason, count in Counter(error.reason.value for error in batch.errors).items():
        records_rejected_counter.add(count, {"reason": reason})

    logger.info(
        "time_records_saved",
        received=len(items),
        saved=len(batch.results),
        rejected=len(batch.errors),
        status=batch.status.value,
    )
    for error in batch.errors:
        logger.warning(
            "time_record_rejected",
            employee_id=error.employee_id,
            year=error.year,
            month=error.month,
            day=error.day,
            reason=error.reason.value,
            message=error.message,
        )
    return batch
