from __future__ import annotations

import pytest

from src.toil_system.toil_system.core.exceptions import LockUnavailable
from src.toil_system.toil_system.toil.locks import MySQLEmployeeLocks, ThreadEmployeeLocks


class FakeLockCursor:
    def __init__(self, acquired: int):
        self._acquired = acquired
        self.statements: list[tuple[str, tuple]] = []
        self._last = None

    def execute(self, sql, params=()):
        self.statements.append((sql, params))
        self._last = sql

    def fetchone(self):
        if "GET_LOCK" in self._last:
            return (self._acquired,)
        return (1,)

    def close(self):
        pass


class FakeLockConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.closed = False

    def cursor(self):
        return self._cursor

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, acquired: int):
        self.cursor = FakeLockCursor(acquired)
        self.conn = FakeLockConnection(self.cursor)

    def connect(self):
        return self.conn


def test_mysql_lock_is_named_per_employee_and_released():
    factory = FakeConnFactory(acquired=1)
    locks = MySQLEmployeeLocks(factory, timeout_seconds=3)

    with locks.hold(42):
        pass

    assert factory.cursor.statements == [
        ("SELECT GET_LOCK(%s, %s)", ("toil:employee:42", 3)),
        ("SELECT RELEASE_LOCK(%s)", ("toil:employee:42",)),
    ]
    assert factory.conn.closed is True


def test_mysql_lock_timeout_raises():
    factory = FakeConnFactory(acquired=0)
    locks = MySQLEmployeeLocks(factory, timeout_seconds=1)

    with pytest.raises(LockUnavailable):
        with locks.hold(42):
            pytest.fail("body must not run without the lock")

    assert len(factory.cursor.statements) == 1
    assert factory.conn.closed is True


def test_thread_locks_are_shared_per_employee():
    locks = ThreadEmployeeLocks()

    with locks.hold(1):
        # A different employee is not blocked.
        with locks.hold(2):
            pass
    assert locks._lock_for(1) is locks._lock_for(1)
    assert locks._lock_for(1) is not locks._lock_for(2)
