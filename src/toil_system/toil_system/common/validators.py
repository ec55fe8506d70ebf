from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ..core.constants import LEDGER_QUANTUM
from ..core.exceptions import InvalidAmount


def to_hours(value: object, field_name: str = "hours") -> Decimal:
    """Coerce user input into a Decimal hours value.

    Floats go through ``str`` so 0.1 stays 0.1 instead of its binary expansion.
    Amounts finer than the ledger can store are refused rather than rounded.
    """

    if isinstance(value, bool) or value is None:
        raise InvalidAmount(f"{field_name} is not a number")
    if isinstance(value, float):
        value = str(value)
    try:
        hours = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmount(f"{field_name} is not a number")
    if not hours.is_finite():
        raise InvalidAmount(f"{field_name} is not a number")
    try:
        exact = hours == hours.quantize(LEDGER_QUANTUM)
    except InvalidOperation:
        exact = False
    if not exact:
        raise InvalidAmount(f"{field_name} allows at most 4 decimal places")
    return hours


def require_positive_hours(value: object, field_name: str = "hours") -> Decimal:
    hours = to_hours(value, field_name)
    if hours <= 0:
        raise InvalidAmount(f"{field_name} must be greater than 0")
    return hours
