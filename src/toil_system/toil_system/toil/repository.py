from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Allocation, ToilLedgerEntry


class ToilLedgerRepository(Protocol):
    """Row store for ledger entries. Rows are never deleted."""

    def create(
        self,
        *,
        employee_id: int,
        hours_earned: Decimal,
        earned_date: datetime,
        expiry_date: datetime,
        source_interval_id: Optional[int] = None,
        note: Optional[str] = None,
    ) -> int:
        """Insert a new entry and return its id.

        Raises DuplicateSourceInterval if another entry references the same interval.
        """

        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[ToilLedgerEntry]:
        raise NotImplementedError

    def find_by_source_interval(self, source_interval_id: int) -> Optional[ToilLedgerEntry]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[ToilLedgerEntry]:
        """All entries of the employee, newest earned first."""

        raise NotImplementedError

    def list_active(self, employee_id: int) -> Sequence[ToilLedgerEntry]:
        """Unexpired entries with hours left, soonest expiry first."""

        raise NotImplementedError

    def add_usage(self, *, entry_id: int, hours: Decimal) -> bool:
        """Atomically add ``hours`` to hours_used if enough remains.

        Returns False (and changes nothing) when the entry holds less than ``hours``.
        """

        raise NotImplementedError

    def add_usages(self, allocations: Sequence[Allocation]) -> None:
        """Apply several conditional deductions as one unit.

        Raises OverDeduction and changes nothing if any entry holds too little.
        """

        raise NotImplementedError

    def list_due_for_expiry(self, now: datetime) -> Sequence[int]:
        raise NotImplementedError

    def mark_expired(self, entry_ids: Sequence[int]) -> int:
        """Flip is_expired on the given entries; returns how many actually changed."""

        raise NotImplementedError
