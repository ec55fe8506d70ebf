from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import HolidayType


@dataclass(frozen=True)
class Holiday:
    """Ngày nghỉ công ty. Recurring holidays repeat on the same month/day each year."""

    holiday_id: int
    name: str
    holiday_date: date
    holiday_type: HolidayType = HolidayType.PUBLIC
    is_recurring: bool = False
    description: Optional[str] = None
