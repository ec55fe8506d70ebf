"""TOIL eligibility for a completed attendance interval.

Weekday work earns only the hours past the standard day. Weekend and holiday
work earns the whole shift, since the employee was not scheduled at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..common.time_arithmetic import HolidayLookup, is_holiday, is_weekend, working_hours
from ..core.enums import ToilSource
from ..core.exceptions import InvalidInterval
from ..core.policy import ToilPolicy
from .model import AttendanceInterval

_ZERO = Decimal(0)


@dataclass(frozen=True)
class EligibilityResult:
    eligible: bool
    hours_earned: Decimal
    working_hours: Decimal
    overtime_hours: Decimal
    weekend_work: bool
    holiday_work: bool

    @property
    def source(self) -> Optional[ToilSource]:
        if self.weekend_work:
            return ToilSource.WEEKEND
        if self.holiday_work:
            return ToilSource.HOLIDAY
        if self.overtime_hours > 0:
            return ToilSource.OVERTIME
        return None

    def note(self) -> str:
        if self.source is ToilSource.WEEKEND:
            return "TOIL earned for weekend work"
        if self.source is ToilSource.HOLIDAY:
            return "TOIL earned for holiday work"
        return f"TOIL earned for {self.overtime_hours} hours overtime"


class EligibilityClassifier:
    def __init__(self, policy: ToilPolicy | None = None):
        self._policy = policy or ToilPolicy()

    def classify(self, interval: AttendanceInterval, calendar: Optional[HolidayLookup]) -> EligibilityResult:
        if not interval.is_finalized:
            raise InvalidInterval("Attendance interval has no check-out yet")

        worked = working_hours(interval.check_in_time, interval.check_out_time)
        overtime = max(_ZERO, worked - self._policy.standard_hours)
        weekend_work = is_weekend(interval.work_date, self._policy.weekend_days)
        holiday_work = is_holiday(interval.work_date, calendar)

        if weekend_work or holiday_work:
            earned = worked
        elif overtime > 0:
            earned = overtime
        else:
            earned = _ZERO

        return EligibilityResult(
            eligible=overtime > 0 or weekend_work or holiday_work,
            hours_earned=earned,
            working_hours=worked,
            overtime_hours=overtime,
            weekend_work=weekend_work,
            holiday_work=holiday_work,
        )
