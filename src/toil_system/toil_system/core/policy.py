from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Tuple

from .constants import (
    DEFAULT_LOCK_TIMEOUT_SECONDS,
    DEFAULT_STANDARD_HOURS,
    DEFAULT_TOIL_EXPIRY_DAYS,
    DEFAULT_WARNING_HORIZON_DAYS,
    DEFAULT_WEEKEND_DAYS,
)


@dataclass(frozen=True)
class ToilPolicy:
    """Company TOIL rules, read once from settings."""

    standard_hours: Decimal = DEFAULT_STANDARD_HOURS
    expiry_days: int = DEFAULT_TOIL_EXPIRY_DAYS
    warning_horizon_days: int = DEFAULT_WARNING_HORIZON_DAYS
    weekend_days: Tuple[int, ...] = DEFAULT_WEEKEND_DAYS
    require_weekend_approval: bool = False
    lock_timeout_seconds: int = DEFAULT_LOCK_TIMEOUT_SECONDS

    @classmethod
    def from_settings(cls, values: Mapping[str, Any] | None) -> "ToilPolicy":
        values = dict(values or {})
        weekend = values.get("weekend_days", DEFAULT_WEEKEND_DAYS)
        if isinstance(weekend, str):
            weekend = [p for p in weekend.split(",") if p.strip()]
        return cls(
            standard_hours=Decimal(str(values.get("standard_hours", DEFAULT_STANDARD_HOURS))),
            expiry_days=int(values.get("expiry_days", DEFAULT_TOIL_EXPIRY_DAYS)),
            warning_horizon_days=int(values.get("warning_horizon_days", DEFAULT_WARNING_HORIZON_DAYS)),
            weekend_days=tuple(int(d) for d in weekend),
            require_weekend_approval=bool(values.get("require_weekend_approval", False)),
            lock_timeout_seconds=int(values.get("lock_timeout_seconds", DEFAULT_LOCK_TIMEOUT_SECONDS)),
        )
