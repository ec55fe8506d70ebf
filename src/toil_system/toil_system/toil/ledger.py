from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import as_datetime
from ..common.validators import require_positive_hours
from ..core.exceptions import NotFoundError, OverDeduction
from ..core.policy import ToilPolicy
from .model import Allocation, ToilLedgerEntry
from .repository import ToilLedgerRepository

logger = logging.getLogger(__name__)


class ToilLedger:
    """Validating front for the ledger store.

    Entries are only ever created, debited via apply_usage or apply_usages, or flagged expired.
    """

    def __init__(self, entries: ToilLedgerRepository, *, policy: ToilPolicy | None = None):
        self._entries = entries
        self._policy = policy or ToilPolicy()

    def expiry_for(self, earned_date: date | datetime) -> datetime:
        return as_datetime(earned_date) + timedelta(days=self._policy.expiry_days)

    def create_entry(
        self,
        *,
        employee_id: int,
        hours_earned: object,
        earned_date: date | datetime,
        source_interval_id: Optional[int] = None,
        note: Optional[str] = None,
    ) -> int:
        hours = require_positive_hours(hours_earned, "hours_earned")
        earned_at = as_datetime(earned_date)
        entry_id = self._entries.create(
            employee_id=int(employee_id),
            hours_earned=hours,
            earned_date=earned_at,
            expiry_date=self.expiry_for(earned_at),
            source_interval_id=source_interval_id,
            note=(note or "").strip() or None,
        )
        logger.info(
            "TOIL entry %s created: employee=%s hours=%s interval=%s",
            entry_id, employee_id, hours, source_interval_id,
        )
        return entry_id

    def get_entry(self, entry_id: int) -> ToilLedgerEntry:
        entry = self._entries.get_by_id(int(entry_id))
        if not entry:
            raise NotFoundError(f"TOIL entry {entry_id} not found")
        return entry

    def find_by_source_interval(self, source_interval_id: int) -> Optional[ToilLedgerEntry]:
        return self._entries.find_by_source_interval(int(source_interval_id))

    def list_entries(self, employee_id: int) -> Sequence[ToilLedgerEntry]:
        return self._entries.list_for_employee(int(employee_id))

    def list_active_entries(self, employee_id: int) -> Sequence[ToilLedgerEntry]:
        return self._entries.list_active(int(employee_id))

    def list_due_for_expiry(self, now: datetime) -> Sequence[int]:
        return self._entries.list_due_for_expiry(now)

    def mark_expired(self, entry_ids: Sequence[int]) -> int:
        if not entry_ids:
            return 0
        return self._entries.mark_expired(list(entry_ids))

    def apply_usage(self, entry_id: int, hours_to_deduct: object) -> Decimal:
        hours = require_positive_hours(hours_to_deduct, "hours_to_deduct")
        entry = self.get_entry(entry_id)
        if hours > entry.hours_remaining or not self._entries.add_usage(entry_id=entry.entry_id, hours=hours):
            raise OverDeduction(
                f"Cannot deduct {hours}h from TOIL entry {entry.entry_id} "
                f"({entry.hours_remaining}h remaining)"
            )
        return self.get_entry(entry.entry_id).hours_remaining

    def apply_usages(self, allocations: Sequence[Allocation]) -> None:
        """Debit several entries together; on OverDeduction none of them change."""
        batch = [
            Allocation(entry_id=int(a.entry_id), hours=require_positive_hours(a.hours, "hours_to_deduct"))
            for a in allocations
        ]
        if not batch:
            return
        self._entries.add_usages(batch)
