from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from ..common.time_arithmetic import round_hours
from ..core.enums import UsageStatus


@dataclass(frozen=True)
class ToilLedgerEntry:
    """Thực thể miền: one dated, expiring unit of TOIL credit."""

    entry_id: int
    employee_id: int
    hours_earned: Decimal
    hours_used: Decimal
    earned_date: datetime
    expiry_date: datetime
    is_expired: bool = False
    source_interval_id: Optional[int] = None
    note: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def hours_remaining(self) -> Decimal:
        return self.hours_earned - self.hours_used

    @property
    def is_active(self) -> bool:
        return not self.is_expired and self.hours_remaining > 0

    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "employee_id": self.employee_id,
            "hours_earned": str(round_hours(self.hours_earned)),
            "hours_used": str(round_hours(self.hours_used)),
            "hours_remaining": str(round_hours(self.hours_remaining)),
            "earned_date": self.earned_date.isoformat(),
            "expiry_date": self.expiry_date.isoformat(),
            "is_expired": self.is_expired,
            "source_interval_id": self.source_interval_id,
            "note": self.note or "",
        }


@dataclass(frozen=True)
class BalanceSummary:
    """Read-model: rounded to 2 decimals, never persisted."""

    employee_id: int
    total_hours: Decimal
    expiring_hours: Decimal
    expiring_date: Optional[datetime]

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "total_hours": str(self.total_hours),
            "expiring_hours": str(self.expiring_hours),
            "expiring_date": self.expiring_date.isoformat() if self.expiring_date else None,
        }


@dataclass(frozen=True)
class Allocation:
    entry_id: int
    hours: Decimal


@dataclass(frozen=True)
class UsageResult:
    status: UsageStatus
    hours_requested: Decimal
    hours_deducted: Decimal
    hours_available: Decimal
    allocations: Tuple[Allocation, ...] = field(default_factory=tuple)

    @property
    def success(self) -> bool:
        return self.status is UsageStatus.SUCCESS

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "status": self.status.value,
            "hours_requested": str(self.hours_requested),
            "hours_deducted": str(self.hours_deducted),
            "hours_available": str(round_hours(self.hours_available)),
            "allocations": [{"entry_id": a.entry_id, "hours": str(a.hours)} for a in self.allocations],
        }
