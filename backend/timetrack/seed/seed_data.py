from datetime import date, timedelta

from sqlalchemy.orm import Session

from timetrack.domains.time_tracking.month_calendar import is_weekend_date
from timetrack.models import Employee, TimeRecord


def seed(session: Session, today: date | None = None) -> None:
    """Load a few employees with hours for the current month, for local development."""
    today = today or date.today()
    first_of_month = today.replace(day=1)

    ada = Employee(name="Ada Lovelace", email="ada@example.com", start_date=date(2020, 1, 1))
    grace = Employee(
        name="Grace Hopper",
        email="grace@example.com",
        start_date=first_of_month + timedelta(days=min(9, today.day - 1)),
    )
    alan = Employee(
        name="Alan Turing",
        email="alan@example.com",
        start_date=date(2019, 6, 1),
        end_date=first_of_month - timedelta(days=1),
    )
    session.add_all([ada, grace, alan])
    session.flush()

    records = []
    current = first_of_month
    while current <= today:
        if not is_weekend_date(current):
            records.append(
                TimeRecord(
                    employee_id=ada.id,
                    year=current.year,
                    month=current.month - 1,
                    day=current.day,
                    hours=8,
                )
            )
            if current >= grace.start_date:
                records.append(
                    TimeRecord(
                        employee_id=grace.id,
                        year=current.year,
                        month=current.month - 1,
                        day=current.day,
                        hours=6.5,
                    )
                )
        current += timedelta(days=1)

    session.add_all(records)
    session.commit()
