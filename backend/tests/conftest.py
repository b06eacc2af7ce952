from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from timetrack.core.clock import get_today
from timetrack.db.session import Base, build_engine, get_session
from timetrack.main import app
from timetrack.models import Employee, TimeRecord

# Thursday; June 2024 starts on a Saturday
TODAY = date(2024, 6, 20)
engine = build_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_session] = override_get_session
app.dependency_overrides[get_today] = lambda: TODAY


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_employee(db):
    def _make(name: str, start_date: date, end_date: date | None = None, email: str | None = None):
        employee = Employee(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            start_date=start_date,
            end_date=end_date,
        )
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee

    return _make


@pytest.fixture
def add_hours(db):
    def _add(employee_id: int, year: int, month: int, hours_by_day: dict[int, float]) -> None:
        db.add_all(
            TimeRecord(employee_id=employee_id, year=year, month=month, day=day, hours=hours)
            for day, hours in hours_by_day.items()
        )
        db.commit()

    return _add
