from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from ..common.datetime_utils import as_date
from .model import Holiday
from .repository import HolidayRepository


class HolidayCalendar:
    """Snapshot of company holidays answering ``is_holiday(day)``.

    Passed explicitly into the classifier so tests can use synthetic calendars.
    """

    def __init__(self, holidays: Iterable[Holiday] = ()):
        self._dates: set[date] = set()
        self._recurring: set[tuple[int, int]] = set()
        for h in holidays:
            self.add(h)

    @classmethod
    def from_dates(cls, days: Iterable[date]) -> "HolidayCalendar":
        cal = cls()
        for d in days:
            cal._dates.add(as_date(d))
        return cal

    def add(self, holiday: Holiday) -> None:
        day = as_date(holiday.holiday_date)
        if holiday.is_recurring:
            self._recurring.add((day.month, day.day))
        else:
            self._dates.add(day)

    def is_holiday(self, day: date | datetime) -> bool:
        d = as_date(day)
        return d in self._dates or (d.month, d.day) in self._recurring

    def __len__(self) -> int:
        return len(self._dates) + len(self._recurring)


class RepositoryHolidayCalendar:
    """Reads holidays from the store on every lookup.

    Holidays are maintained elsewhere; reloading keeps long-running processes current.
    """

    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def snapshot(self) -> HolidayCalendar:
        return HolidayCalendar(self._holidays.list_all())

    def is_holiday(self, day: date | datetime) -> bool:
        return self.snapshot().is_holiday(day)
