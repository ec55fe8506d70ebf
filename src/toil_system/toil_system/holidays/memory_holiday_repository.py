from __future__ import annotations

from datetime import date
from threading import Lock
from typing import Optional, Sequence

from ..core.enums import HolidayType
from .model import Holiday
from .repository import HolidayRepository


class InMemoryHolidayRepository(HolidayRepository):
    def __init__(self, holidays: Sequence[Holiday] = ()):
        self._lock = Lock()
        self._rows: dict[int, Holiday] = {h.holiday_id: h for h in holidays}
        self._next_id = max(self._rows, default=0) + 1

    def list_all(self) -> Sequence[Holiday]:
        with self._lock:
            return sorted(self._rows.values(), key=lambda h: h.holiday_date)

    def create(
        self,
        *,
        name: str,
        holiday_date: date,
        holiday_type: HolidayType = HolidayType.PUBLIC,
        is_recurring: bool = False,
        description: Optional[str] = None,
    ) -> int:
        with self._lock:
            holiday_id = self._next_id
            self._next_id += 1
            self._rows[holiday_id] = Holiday(
                holiday_id=holiday_id,
                name=name,
                holiday_date=holiday_date,
                holiday_type=holiday_type,
                is_recurring=bool(is_recurring),
                description=description,
            )
            return holiday_id
