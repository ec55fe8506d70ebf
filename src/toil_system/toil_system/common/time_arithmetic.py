"""Pure time helpers used by TOIL eligibility and balance computations."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Protocol

from ..core.constants import DEFAULT_WEEKEND_DAYS, HOURS_QUANTUM
from ..core.exceptions import InvalidInterval
from .datetime_utils import as_date

_SECONDS_PER_HOUR = Decimal(3600)


class HolidayLookup(Protocol):
    def is_holiday(self, day: date) -> bool:
        raise NotImplementedError


def round_hours(value: Decimal) -> Decimal:
    """Round to 2 decimals, half away from zero (not banker's rounding)."""
    return Decimal(value).quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def working_hours(check_in: datetime, check_out: Optional[datetime]) -> Decimal:
    if check_in is None or check_out is None:
        raise InvalidInterval("Both check-in and check-out are required")
    if check_out <= check_in:
        raise InvalidInterval("Check-out must be after check-in")

    elapsed = check_out - check_in
    # Integer microseconds keep the division exact before rounding.
    micros = (elapsed.days * 86400 + elapsed.seconds) * 1_000_000 + elapsed.microseconds
    return round_hours(Decimal(micros) / (_SECONDS_PER_HOUR * 1_000_000))


def is_weekend(day: date | datetime, weekend_days: Iterable[int] = DEFAULT_WEEKEND_DAYS) -> bool:
    return as_date(day).weekday() in set(weekend_days)


def is_holiday(day: date | datetime, calendar: Optional[HolidayLookup]) -> bool:
    if calendar is None:
        return False
    return bool(calendar.is_holiday(as_date(day)))
