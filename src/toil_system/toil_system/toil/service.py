from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.eligibility import EligibilityClassifier, EligibilityResult
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import as_date
from ..common.time_arithmetic import HolidayLookup, is_holiday, is_weekend
from ..core.exceptions import DuplicateSourceInterval
from ..core.policy import ToilPolicy
from .approvals import StaticWorkApprovals, WorkApprovalProvider
from .balance import BalanceAggregator
from .consumption import ConsumptionEngine
from .expiry import ExpirySweep
from .ledger import ToilLedger
from .locks import EmployeeLocks
from .model import BalanceSummary, ToilLedgerEntry, UsageResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceEligibility:
    can_attend: bool
    is_weekend: bool
    is_holiday: bool
    has_approved_work: bool
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "can_attend": self.can_attend,
            "reason": self.reason or "",
            "is_weekend": self.is_weekend,
            "is_holiday": self.is_holiday,
            "has_approved_work": self.has_approved_work,
        }


class ToilService:
    """Operations the API layer calls: accrue, report, spend and expire TOIL."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        ledger: ToilLedger,
        calendar: HolidayLookup,
        *,
        policy: ToilPolicy | None = None,
        classifier: EligibilityClassifier | None = None,
        locks: EmployeeLocks | None = None,
        approvals: WorkApprovalProvider | None = None,
    ):
        self._attendance = attendance
        self._ledger = ledger
        self._calendar = calendar
        self._policy = policy or ToilPolicy()
        self._classifier = classifier or EligibilityClassifier(self._policy)
        self._balances = BalanceAggregator(ledger, warning_horizon_days=self._policy.warning_horizon_days)
        self._consumption = ConsumptionEngine(ledger, locks=locks)
        self._sweep = ExpirySweep(ledger)
        self._approvals = approvals or StaticWorkApprovals()

    def process_attendance_for_toil(self, interval_id: int) -> Optional[ToilLedgerEntry]:
        """Classify a finished interval and credit TOIL once.

        Returns the interval's ledger entry, or None when it earns nothing.
        """

        interval = self._attendance.get_by_id(int(interval_id))
        if not interval or not interval.is_finalized:
            logger.warning("Skipping TOIL processing for interval %s: missing or not checked out", interval_id)
            return None

        existing = self._ledger.find_by_source_interval(interval.interval_id)
        if existing:
            logger.debug("Interval %s already credited as TOIL entry %s", interval.interval_id, existing.entry_id)
            return existing

        result = self._classifier.classify(interval, self._calendar)
        self._attendance.record_toil_classification(
            interval_id=interval.interval_id,
            working_hours=result.working_hours,
            overtime_hours=result.overtime_hours,
            is_weekend_work=result.weekend_work,
            is_holiday_work=result.holiday_work,
            is_toil_eligible=result.eligible,
            toil_hours_earned=result.hours_earned,
        )

        if not result.eligible or result.hours_earned <= 0:
            return None
        return self._credit(interval.interval_id, interval.employee_id, interval.check_in_time, result)

    def _credit(
        self,
        interval_id: int,
        employee_id: int,
        earned_at: datetime,
        result: EligibilityResult,
    ) -> Optional[ToilLedgerEntry]:
        try:
            entry_id = self._ledger.create_entry(
                employee_id=employee_id,
                hours_earned=result.hours_earned,
                earned_date=earned_at,
                source_interval_id=interval_id,
                note=result.note(),
            )
        except DuplicateSourceInterval:
            # A concurrent call credited this interval first.
            logger.info("Interval %s was credited concurrently", interval_id)
            return self._ledger.find_by_source_interval(interval_id)
        return self._ledger.get_entry(entry_id)

    def get_user_toil_balance(self, employee_id: int, *, now: Optional[datetime] = None) -> BalanceSummary:
        return self._balances.get_balance(employee_id, now=now)

    def use_toil_hours(self, employee_id: int, hours: object) -> UsageResult:
        return self._consumption.use_hours(employee_id, hours)

    def expire_old_toil(self, now: Optional[datetime] = None) -> int:
        return self._sweep.run(now)

    def list_toil_history(self, employee_id: int) -> Sequence[ToilLedgerEntry]:
        return self._ledger.list_entries(employee_id)

    def check_attendance_eligibility(self, employee_id: int, day: date | datetime) -> AttendanceEligibility:
        d = as_date(day)
        weekend = is_weekend(d, self._policy.weekend_days)
        holiday = is_holiday(d, self._calendar)
        approved = self._approvals.has_approved_work(int(employee_id), d)

        reason = None
        if self._policy.require_weekend_approval and not approved:
            if weekend:
                reason = "Weekend work requires approved TOIL request"
            elif holiday:
                reason = "Holiday work requires approved TOIL request"

        return AttendanceEligibility(
            can_attend=reason is None,
            is_weekend=weekend,
            is_holiday=holiday,
            has_approved_work=approved,
            reason=reason,
        )
