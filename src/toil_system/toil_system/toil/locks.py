from __future__ import annotations

import logging
from contextlib import contextmanager
from threading import Lock
from typing import ContextManager, Iterator, Protocol

from ..core.exceptions import LockUnavailable
from ..database.connection import DatabaseConnection

logger = logging.getLogger(__name__)


class EmployeeLocks(Protocol):
    def hold(self, employee_id: int) -> ContextManager[None]:
        raise NotImplementedError


class ThreadEmployeeLocks(EmployeeLocks):
    """One mutex per employee, for a single-process deployment."""

    def __init__(self):
        self._guard = Lock()
        self._locks: dict[int, Lock] = {}

    def _lock_for(self, employee_id: int) -> Lock:
        with self._guard:
            return self._locks.setdefault(int(employee_id), Lock())

    @contextmanager
    def hold(self, employee_id: int) -> Iterator[None]:
        with self._lock_for(employee_id):
            yield


class MySQLEmployeeLocks(EmployeeLocks):
    """Per-employee MySQL named lock (GET_LOCK), shared by every app process.

    The lock belongs to the session, so one connection stays open while held.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, timeout_seconds: int = 10):
        self._conn_factory = conn_factory
        self._timeout = int(timeout_seconds)

    @staticmethod
    def lock_name(employee_id: int) -> str:
        return f"toil:employee:{int(employee_id)}"

    @contextmanager
    def hold(self, employee_id: int) -> Iterator[None]:
        name = self.lock_name(employee_id)
        conn = self._conn_factory.connect()
        try:
            cur = conn.cursor()
            try:
                cur.execute("SELECT GET_LOCK(%s, %s)", (name, self._timeout))
                (acquired,) = cur.fetchone()
                if acquired != 1:
                    raise LockUnavailable(f"Timed out waiting for lock {name}")
                try:
                    yield
                finally:
                    cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                    cur.fetchone()
            finally:
                cur.close()
        finally:
            conn.close()
