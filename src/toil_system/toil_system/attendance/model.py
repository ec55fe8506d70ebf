from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class AttendanceInterval:
    """One employee's check-in/check-out pair for a calendar day.

    The derived columns stay empty until the interval has been classified.
    """

    interval_id: int
    employee_id: int
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    working_hours: Optional[Decimal] = None
    overtime_hours: Optional[Decimal] = None
    is_weekend_work: bool = False
    is_holiday_work: bool = False
    is_toil_eligible: bool = False
    toil_hours_earned: Decimal = Decimal(0)

    @property
    def is_finalized(self) -> bool:
        return self.check_out_time is not None
