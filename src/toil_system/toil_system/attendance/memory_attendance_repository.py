from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from threading import Lock
from typing import Optional

from ..core.exceptions import ValidationError
from .model import AttendanceInterval
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self):
        self._lock = Lock()
        self._by_id: dict[int, AttendanceInterval] = {}
        self._by_employee_date: dict[tuple[int, date], int] = {}
        self._next_id = 1

    def add_interval(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in_time: datetime,
        check_out_time: Optional[datetime] = None,
    ) -> int:
        with self._lock:
            key = (int(employee_id), work_date)
            if key in self._by_employee_date:
                raise ValidationError("Attendance already recorded for this day")
            interval_id = self._next_id
            self._next_id += 1
            self._by_id[interval_id] = AttendanceInterval(
                interval_id=interval_id,
                employee_id=int(employee_id),
                work_date=work_date,
                check_in_time=check_in_time,
                check_out_time=check_out_time,
            )
            self._by_employee_date[key] = interval_id
            return interval_id

    def get_by_id(self, interval_id: int) -> Optional[AttendanceInterval]:
        with self._lock:
            return self._by_id.get(int(interval_id))

    def record_toil_classification(
        self,
        *,
        interval_id: int,
        working_hours: Decimal,
        overtime_hours: Decimal,
        is_weekend_work: bool,
        is_holiday_work: bool,
        is_toil_eligible: bool,
        toil_hours_earned: Decimal,
    ) -> bool:
        with self._lock:
            rec = self._by_id.get(int(interval_id))
            if not rec:
                return False
            self._by_id[rec.interval_id] = replace(
                rec,
                working_hours=working_hours,
                overtime_hours=overtime_hours,
                is_weekend_work=is_weekend_work,
                is_holiday_work=is_holiday_work,
                is_toil_eligible=is_toil_eligible,
                toil_hours_earned=toil_hours_earned,
            )
            return True
