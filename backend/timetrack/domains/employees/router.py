from __future__ import annotations

import re
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, field_validator, model_validator
from sqlalchemy import func
from sqlalchemy.orm import Session

from timetrack.core.clock import get_today
from timetrack.core.logging import get_logger
from timetrack.db.session import get_session
from timetrack.domains.time_tracking.upsert import MAX_ID
from timetrack.domains.time_tracking.validity import EmploymentWindow
from timetrack.models.employee import Employee

router = APIRouter(prefix="/employees", tags=["employees"])
logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _normalize_email(value: str) -> str:
    email = value.strip()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")
    return email


def _normalize_name(value: str) -> str:
    name = value.strip()
    if not name:
        raise ValueError("Name must not be empty")
    return name


class EmployeeCreate(BaseModel):
    name: str
    email: str
    startDate: date
    endDate: date | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _normalize_name(value)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)

    @model_validator(mode="after")
    def check_window(self) -> "EmployeeCreate":
        if self.endDate is not None and self.endDate < self.startDate:
            raise ValueError("End date cannot be before start date")
        return self


class EmployeeUpdate(BaseModel):
    name: str | None = None
    email: str | None = None
    startDate: date | None = None
    endDate: date | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return _normalize_name(value) if value is not None else None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        return _normalize_email(value) if value is not None else None


class EmployeeOut(BaseModel):
    id: int
    name: str
    email: str
    startDate: date
    endDate: date | None = None
    createdAt: datetime | None = None
    updatedAt: datetime | None = None


def _serialize(row: Employee) -> EmployeeOut:
    return EmployeeOut(
        id=row.id,
        name=row.name,
        email=row.email,
        startDate=row.start_date,
        endDate=row.end_date,
        createdAt=row.created_at,
        updatedAt=row.updated_at,
    )


def _get_or_404(db: Session, employee_id: int) -> Employee:
    row = db.query(Employee).filter(Employee.id == employee_id).one_or_none()
    if not row:
        raise HTTPException(status_code=404, detail="Employee not found")
    return row


def _email_taken(db: Session, email: str, exclude_id: int | None = None) -> bool:
    query = db.query(Employee).filter(func.lower(Employee.email) == email.lower())
    if exclude_id is not None:
        query = query.filter(Employee.id != exclude_id)
    return db.query(query.exists()).scalar()


@router.get("", response_model=list[EmployeeOut])
def list_employees(db: Session = Depends(get_session)) -> list[EmployeeOut]:
    rows = db.query(Employee).order_by(Employee.name.asc(), Employee.id.asc()).all()
    return [_serialize(row) for row in rows]


@router.get("/active", response_model=list[EmployeeOut])
def list_active_employees(
    on: date | None = Query(default=None, description="Day to check, defaults to today"),
    db: Session = Depends(get_session),
    today: date = Depends(get_today),
) -> list[EmployeeOut]:
    day = on or today
    rows = (
        db.query(Employee)
        .filter(Employee.start_date <= day)
        .order_by(Employee.name.asc(), Employee.id.asc())
        .all()
    )
    return [_serialize(row) for row in rows if EmploymentWindow.of(row).covers(day)]


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(
    employee_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_session),
) -> EmployeeOut:
    return _serialize(_get_or_404(db, employee_id))


@router.post("", response_model=EmployeeOut, status_code=201)
def create_employee(payload: EmployeeCreate, db: Session = Depends(get_session)) -> EmployeeOut:
    if _email_taken(db, payload.email):
        raise HTTPException(status_code=400, detail="Employee with this email already exists")

    row = Employee(
        name=payload.name,
        email=payload.email,
        start_date=payload.startDate,
        end_date=payload.endDate,
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info("employee_created", employee_id=row.id, email=row.email)
    return _serialize(row)


@router.put("/{employee_id}", response_model=EmployeeOut)
def update_employee(
    payload: EmployeeUpdate,
    employee_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_session),
) -> EmployeeOut:
    row = _get_or_404(db, employee_id)
    supplied = payload.model_fields_set

    if payload.email is not None and payload.email != row.email:
        if _email_taken(db, payload.email, exclude_id=row.id):
            raise HTTPException(status_code=400, detail="Employee with this email already exists")

    start_date = payload.startDate or row.start_date
    # endDate is the one field that can be cleared, by sending it as null
    end_date = payload.endDate if "endDate" in supplied else row.end_date
    if end_date is not None and end_date < start_date:
        raise HTTPException(status_code=400, detail="End date cannot be before start date")

    row.name = payload.name or row.name
    row.email = payload.email or row.email
    row.start_date = start_date
    row.end_date = end_date
    db.commit()
    db.refresh(row)

    logger.info("employee_updated", employee_id=row.id, fields=sorted(supplied))
    return _serialize(row)


@router.delete("/{employee_id}")
def delete_employee(
    employee_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_session),
) -> dict[str, str]:
    row = _get_or_404(db, employee_id)
    db.delete(row)
    db.commit()

    logger.info("employee_deleted", employee_id=employee_id)
    return {"message": "Employee successfully deleted"}
