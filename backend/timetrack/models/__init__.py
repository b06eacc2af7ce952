from .employee import Employee
from .time_record import TimeRecord

__all__ = ["Employee", "TimeRecord"]
