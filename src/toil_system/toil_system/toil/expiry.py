from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from .ledger import ToilLedger

logger = logging.getLogger(__name__)


class ExpirySweep:
    """Retires unused credit whose expiry date has passed. Safe to re-run."""

    def __init__(self, ledger: ToilLedger):
        self._ledger = ledger

    def run(self, now: Optional[datetime] = None) -> int:
        now = now or now_local()
        due = self._ledger.list_due_for_expiry(now)
        count = self._ledger.mark_expired(due)
        if count:
            logger.info("TOIL expiry sweep at %s: %d entries expired", now.isoformat(), count)
        else:
            logger.debug("TOIL expiry sweep at %s: nothing to expire", now.isoformat())
        return count
