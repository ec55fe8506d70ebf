from __future__ import annotations

from enum import Enum


class HolidayType(str, Enum):
    """Loại ngày nghỉ trong lịch công ty."""

    PUBLIC = "public"
    COMPANY = "company"
    OPTIONAL = "optional"


class ToilSource(str, Enum):
    """Why an attendance interval earned TOIL."""

    OVERTIME = "overtime"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"


class UsageStatus(str, Enum):
    """Outcome of a TOIL usage request."""

    SUCCESS = "success"
    INSUFFICIENT_BALANCE = "insufficient_balance"


class StorageBackend(str, Enum):
    MYSQL = "mysql"
    MEMORY = "memory"
