from __future__ import annotations

from datetime import date
from threading import Lock
from typing import Iterable, Protocol


class WorkApprovalProvider(Protocol):
    """Answers whether an employee was pre-approved to work on a non-working day."""

    def has_approved_work(self, employee_id: int, day: date) -> bool:
        raise NotImplementedError


class StaticWorkApprovals(WorkApprovalProvider):
    def __init__(self, approvals: Iterable[tuple[int, date]] = ()):
        self._lock = Lock()
        self._approved: set[tuple[int, date]] = {(int(e), d) for e, d in approvals}

    def approve(self, employee_id: int, day: date) -> None:
        with self._lock:
            self._approved.add((int(employee_id), day))

    def has_approved_work(self, employee_id: int, day: date) -> bool:
        with self._lock:
            return (int(employee_id), day) in self._approved
