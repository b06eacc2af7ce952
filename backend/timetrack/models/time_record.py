from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship

from timetrack.db.session import Base


class TimeRecord(Base):
    __tablename__ = "time_records"
    __table_args__ = (
        UniqueConstraint("employee_id", "year", "month", "day", name="uq_time_records_employee_day"),
        CheckConstraint("month >= 0 AND month <= 11", name="ck_time_records_month"),
        CheckConstraint("day >= 1 AND day <= 31", name="ck_time_records_day"),
        CheckConstraint("hours >= 0 AND hours <= 12", name="ck_time_records_hours"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)  # zero-based, 0 = January
    day = Column(Integer, nullable=False)
    hours = Column(Numeric(precision=4, scale=2, asdecimal=False), nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    employee = relationship("Employee", back_populates="time_records")
