from __future__ import annotations

import logging
from decimal import Decimal

from ..common.validators import require_positive_hours
from ..core.enums import UsageStatus
from .ledger import ToilLedger
from .locks import EmployeeLocks, ThreadEmployeeLocks
from .model import Allocation, UsageResult

logger = logging.getLogger(__name__)


class ConsumptionEngine:
    """Spends TOIL soonest-expiring first, all or nothing.

    The balance check and the deductions run under one per-employee lock so two
    requests for the same employee cannot both pass the check. The deductions
    are committed as one batch, so a store failure leaves every entry untouched.
    """

    def __init__(self, ledger: ToilLedger, *, locks: EmployeeLocks | None = None):
        self._ledger = ledger
        self._locks = locks or ThreadEmployeeLocks()

    def use_hours(self, employee_id: int, hours_requested: object) -> UsageResult:
        requested = require_positive_hours(hours_requested, "hours_requested")

        with self._locks.hold(employee_id):
            entries = self._ledger.list_active_entries(employee_id)
            available = sum((e.hours_remaining for e in entries), Decimal(0))

            if available < requested:
                logger.info(
                    "TOIL usage refused: employee=%s requested=%s available=%s",
                    employee_id, requested, available,
                )
                return UsageResult(
                    status=UsageStatus.INSUFFICIENT_BALANCE,
                    hours_requested=requested,
                    hours_deducted=Decimal(0),
                    hours_available=available,
                )

            outstanding = requested
            allocations: list[Allocation] = []
            for entry in entries:
                if outstanding <= 0:
                    break
                take = min(outstanding, entry.hours_remaining)
                allocations.append(Allocation(entry_id=entry.entry_id, hours=take))
                outstanding -= take

            self._ledger.apply_usages(allocations)

        logger.info(
            "TOIL used: employee=%s hours=%s entries=%s",
            employee_id, requested, [a.entry_id for a in allocations],
        )
        return UsageResult(
            status=UsageStatus.SUCCESS,
            hours_requested=requested,
            hours_deducted=requested,
            hours_available=available - requested,
            allocations=tuple(allocations),
        )
