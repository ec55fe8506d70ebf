from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol

from .model import AttendanceInterval


class AttendanceRepository(Protocol):
    """Attendance source consumed by the TOIL engine (check-in/out lives elsewhere)."""

    def get_by_id(self, interval_id: int) -> Optional[AttendanceInterval]:
        raise NotImplementedError

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
        """Persist the derived eligibility columns on the interval."""

        raise NotImplementedError
