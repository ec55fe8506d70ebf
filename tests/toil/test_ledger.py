from datetime import date, datetime
from decimal import Decimal

import pytest

from src.toil_system.toil_system.core.exceptions import (
    DuplicateSourceInterval,
    InvalidAmount,
    NotFoundError,
    OverDeduction,
)
from src.toil_system.toil_system.core.policy import ToilPolicy
from src.toil_system.toil_system.toil.ledger import ToilLedger
from src.toil_system.toil_system.toil.model import Allocation
from src.toil_system.toil_system.toil.memory_toil_repository import InMemoryToilLedgerRepository


@pytest.fixture
def ledger():
    return ToilLedger(InMemoryToilLedgerRepository())


def test_create_entry_sets_expiry_21_days_after_earned(ledger):
    entry_id = ledger.create_entry(
        employee_id=1,
        hours_earned="2.5",
        earned_date=datetime(2026, 2, 2, 9, 0),
        source_interval_id=11,
        note="  TOIL earned for weekend work ",
    )
    entry = ledger.get_entry(entry_id)

    assert entry.expiry_date == datetime(2026, 2, 23, 9, 0)
    assert entry.hours_earned == Decimal("2.5")
    assert entry.hours_used == 0
    assert entry.hours_remaining == Decimal("2.5")
    assert entry.is_expired is False
    assert entry.note == "TOIL earned for weekend work"


def test_create_entry_accepts_plain_date_and_custom_expiry():
    ledger = ToilLedger(InMemoryToilLedgerRepository(), policy=ToilPolicy(expiry_days=30))
    entry = ledger.get_entry(ledger.create_entry(employee_id=1, hours_earned=1, earned_date=date(2026, 2, 2)))

    assert entry.earned_date == datetime(2026, 2, 2, 0, 0)
    assert entry.expiry_date == datetime(2026, 3, 4, 0, 0)


@pytest.mark.parametrize("hours", [0, -1, "0.00", "abc", None, True])
def test_create_entry_rejects_non_positive_hours(ledger, hours):
    with pytest.raises(InvalidAmount):
        ledger.create_entry(employee_id=1, hours_earned=hours, earned_date=date(2026, 2, 2))
    assert ledger.list_entries(1) == []


def test_one_entry_per_source_interval(ledger):
    ledger.create_entry(employee_id=1, hours_earned=1, earned_date=date(2026, 2, 2), source_interval_id=5)

    with pytest.raises(DuplicateSourceInterval):
        ledger.create_entry(employee_id=1, hours_earned=2, earned_date=date(2026, 2, 2), source_interval_id=5)

    assert len(ledger.list_entries(1)) == 1
    assert ledger.find_by_source_interval(5).hours_earned == 1


def test_list_active_orders_by_expiry_and_skips_spent_or_expired(ledger):
    late = ledger.create_entry(employee_id=1, hours_earned=1, earned_date=date(2026, 2, 10))
    early = ledger.create_entry(employee_id=1, hours_earned=1, earned_date=date(2026, 2, 1))
    spent = ledger.create_entry(employee_id=1, hours_earned=1, earned_date=date(2026, 2, 3))
    expired = ledger.create_entry(employee_id=1, hours_earned=1, earned_date=date(2026, 2, 4))
    ledger.create_entry(employee_id=2, hours_earned=4, earned_date=date(2026, 2, 1))

    ledger.apply_usage(spent, 1)
    ledger.mark_expired([expired])

    assert [e.entry_id for e in ledger.list_active_entries(1)] == [early, late]
    assert len(ledger.list_entries(1)) == 4


def test_apply_usage_tracks_remaining(ledger):
    entry_id = ledger.create_entry(employee_id=1, hours_earned=3, earned_date=date(2026, 2, 2))

    assert ledger.apply_usage(entry_id, "1.25") == Decimal("1.75")
    assert ledger.apply_usage(entry_id, Decimal("1.75")) == 0

    entry = ledger.get_entry(entry_id)
    assert entry.hours_used == 3
    assert entry.is_active is False


def test_apply_usage_refuses_over_deduction(ledger):
    entry_id = ledger.create_entry(employee_id=1, hours_earned=2, earned_date=date(2026, 2, 2))

    with pytest.raises(OverDeduction):
        ledger.apply_usage(entry_id, "2.01")
    with pytest.raises(InvalidAmount):
        ledger.apply_usage(entry_id, 0)
    with pytest.raises(NotFoundError):
        ledger.apply_usage(999, 1)

    assert ledger.get_entry(entry_id).hours_remaining == 2


def test_apply_usages_is_all_or_nothing(ledger):
    a = ledger.create_entry(employee_id=1, hours_earned=3, earned_date=date(2026, 2, 2))
    b = ledger.create_entry(employee_id=1, hours_earned=1, earned_date=date(2026, 2, 3))

    with pytest.raises(OverDeduction):
        ledger.apply_usages([Allocation(entry_id=a, hours=Decimal("3")), Allocation(entry_id=b, hours=Decimal("2"))])
    assert ledger.get_entry(a).hours_used == 0
    assert ledger.get_entry(b).hours_used == 0

    ledger.apply_usages([Allocation(entry_id=a, hours=Decimal("2")), Allocation(entry_id=b, hours=Decimal("1"))])
    assert ledger.get_entry(a).hours_remaining == 1
    assert ledger.get_entry(b).hours_remaining == 0


def test_amounts_finer_than_the_ledger_column_are_refused(ledger):
    with pytest.raises(InvalidAmount):
        ledger.create_entry(employee_id=1, hours_earned="1.00001", earned_date=date(2026, 2, 2))

    entry_id = ledger.create_entry(employee_id=1, hours_earned="1.2345", earned_date=date(2026, 2, 2))
    with pytest.raises(InvalidAmount):
        ledger.apply_usage(entry_id, "0.00001")
    assert ledger.get_entry(entry_id).hours_remaining == Decimal("1.2345")


def test_mark_expired_is_idempotent(ledger):
    a = ledger.create_entry(employee_id=1, hours_earned=1, earned_date=date(2026, 2, 2))
    b = ledger.create_entry(employee_id=1, hours_earned=1, earned_date=date(2026, 2, 2))

    assert ledger.mark_expired([a]) == 1
    assert ledger.mark_expired([a, b]) == 1
    assert ledger.mark_expired([a, b]) == 0
    assert ledger.mark_expired([]) == 0


def test_conservation_across_entries(ledger):
    ids = [
        ledger.create_entry(employee_id=1, hours_earned=h, earned_date=date(2026, 2, d))
        for h, d in (("1.5", 1), ("2.25", 2), ("4", 3))
    ]
    ledger.apply_usage(ids[0], "1.5")
    ledger.apply_usage(ids[2], "0.75")
    ledger.mark_expired([ids[1]])

    entries = ledger.list_entries(1)
    earned = sum(e.hours_earned for e in entries)
    used = sum(e.hours_used for e in entries)
    remaining = sum(e.hours_remaining for e in entries)

    assert earned - used == remaining == Decimal("5.50")
    assert all(e.hours_remaining >= 0 for e in entries)
