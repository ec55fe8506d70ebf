from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.time_arithmetic import round_hours
from ..core.constants import DEFAULT_WARNING_HORIZON_DAYS
from .ledger import ToilLedger
from .model import BalanceSummary


class BalanceAggregator:
    def __init__(self, ledger: ToilLedger, *, warning_horizon_days: int = DEFAULT_WARNING_HORIZON_DAYS):
        self._ledger = ledger
        self._horizon_days = int(warning_horizon_days)

    def get_balance(
        self,
        employee_id: int,
        warning_horizon_days: Optional[int] = None,
        *,
        now: Optional[datetime] = None,
    ) -> BalanceSummary:
        now = now or now_local()
        horizon_days = self._horizon_days if warning_horizon_days is None else int(warning_horizon_days)
        horizon = now + timedelta(days=horizon_days)

        total = Decimal(0)
        expiring = Decimal(0)
        expiring_date: Optional[datetime] = None

        for entry in self._ledger.list_active_entries(employee_id):
            total += entry.hours_remaining
            # Entries already past expiry but not yet swept are void, not "expiring".
            if now < entry.expiry_date <= horizon:
                expiring += entry.hours_remaining
                if expiring_date is None or entry.expiry_date < expiring_date:
                    expiring_date = entry.expiry_date

        return BalanceSummary(
            employee_id=int(employee_id),
            total_hours=round_hours(total),
            expiring_hours=round_hours(expiring),
            expiring_date=expiring_date,
        )
