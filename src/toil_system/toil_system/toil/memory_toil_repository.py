from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from threading import RLock
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.exceptions import DuplicateSourceInterval, OverDeduction
from .model import Allocation, ToilLedgerEntry
from .repository import ToilLedgerRepository


class InMemoryToilLedgerRepository(ToilLedgerRepository):
    """Arena-style store: rows keyed by entry id, indexed by employee and source interval.

    Every method holds one lock, so ``add_usage`` is a true compare-and-set and
    ``add_usages`` checks every row before touching any.
    """

    def __init__(self):
        self._lock = RLock()
        self._rows: dict[int, ToilLedgerEntry] = {}
        self._by_employee: dict[int, list[int]] = {}
        self._by_source: dict[int, int] = {}
        self._next_id = 1

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
        with self._lock:
            if source_interval_id is not None and source_interval_id in self._by_source:
                raise DuplicateSourceInterval(
                    f"Attendance interval {source_interval_id} already has ledger entry "
                    f"{self._by_source[source_interval_id]}"
                )
            entry_id = self._next_id
            self._next_id += 1
            self._rows[entry_id] = ToilLedgerEntry(
                entry_id=entry_id,
                employee_id=int(employee_id),
                hours_earned=hours_earned,
                hours_used=Decimal(0),
                earned_date=earned_date,
                expiry_date=expiry_date,
                source_interval_id=source_interval_id,
                note=note,
                created_at=now_local(),
            )
            self._by_employee.setdefault(int(employee_id), []).append(entry_id)
            if source_interval_id is not None:
                self._by_source[source_interval_id] = entry_id
            return entry_id

    def get_by_id(self, entry_id: int) -> Optional[ToilLedgerEntry]:
        with self._lock:
            return self._rows.get(int(entry_id))

    def find_by_source_interval(self, source_interval_id: int) -> Optional[ToilLedgerEntry]:
        with self._lock:
            entry_id = self._by_source.get(int(source_interval_id))
            return self._rows.get(entry_id) if entry_id else None

    def _employee_rows(self, employee_id: int) -> list[ToilLedgerEntry]:
        return [self._rows[i] for i in self._by_employee.get(int(employee_id), [])]

    def list_for_employee(self, employee_id: int) -> Sequence[ToilLedgerEntry]:
        with self._lock:
            rows = self._employee_rows(employee_id)
        rows.sort(key=lambda e: (e.earned_date, e.entry_id), reverse=True)
        return rows

    def list_active(self, employee_id: int) -> Sequence[ToilLedgerEntry]:
        with self._lock:
            rows = [e for e in self._employee_rows(employee_id) if e.is_active]
        rows.sort(key=lambda e: (e.expiry_date, e.entry_id))
        return rows

    def add_usage(self, *, entry_id: int, hours: Decimal) -> bool:
        with self._lock:
            row = self._rows.get(int(entry_id))
            if row is None or hours > row.hours_remaining:
                return False
            self._rows[row.entry_id] = replace(row, hours_used=row.hours_used + hours)
            return True

    def add_usages(self, allocations: Sequence[Allocation]) -> None:
        with self._lock:
            wanted: dict[int, Decimal] = {}
            for a in allocations:
                wanted[int(a.entry_id)] = wanted.get(int(a.entry_id), Decimal(0)) + a.hours
            for entry_id, hours in wanted.items():
                row = self._rows.get(entry_id)
                if row is None or hours > row.hours_remaining:
                    raise OverDeduction(f"TOIL entry {entry_id} cannot cover {hours}h")
            for entry_id, hours in wanted.items():
                row = self._rows[entry_id]
                self._rows[entry_id] = replace(row, hours_used=row.hours_used + hours)

    def list_due_for_expiry(self, now: datetime) -> Sequence[int]:
        with self._lock:
            return sorted(
                e.entry_id
                for e in self._rows.values()
                if not e.is_expired and e.expiry_date <= now and e.hours_remaining > 0
            )

    def mark_expired(self, entry_ids: Sequence[int]) -> int:
        changed = 0
        with self._lock:
            for entry_id in entry_ids:
                row = self._rows.get(int(entry_id))
                if row is None or row.is_expired:
                    continue
                self._rows[row.entry_id] = replace(row, is_expired=True)
                changed += 1
        return changed
