from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import HolidayType
from .model import Holiday


class HolidayRepository(Protocol):
    def list_all(self) -> Sequence[Holiday]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        holiday_date: date,
        holiday_type: HolidayType = HolidayType.PUBLIC,
        is_recurring: bool = False,
        description: Optional[str] = None,
    ) -> int:
        raise NotImplementedError
