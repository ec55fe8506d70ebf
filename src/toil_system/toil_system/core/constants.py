"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_STANDARD_HOURS = Decimal("8")
DEFAULT_TOIL_EXPIRY_DAYS = 21
DEFAULT_WARNING_HORIZON_DAYS = 7
# Python weekday numbers (Monday=0): Saturday, Sunday
DEFAULT_WEEKEND_DAYS = (5, 6)
DEFAULT_LOCK_TIMEOUT_SECONDS = 10
HOURS_QUANTUM = Decimal("0.01")
# Finest fraction of an hour the ledger columns hold (DECIMAL(12,4)).
LEDGER_QUANTUM = Decimal("0.0001")
