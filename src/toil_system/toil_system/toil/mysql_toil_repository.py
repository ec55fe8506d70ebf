from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import DuplicateSourceInterval, OverDeduction
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Allocation, ToilLedgerEntry
from .repository import ToilLedgerRepository

_COLUMNS = """
    entry_id, employee_id, hours_earned, hours_used, earned_date, expiry_date,
    is_expired, source_interval_id, note, created_at
"""


def _row_to_entry(r: Dict[str, Any]) -> ToilLedgerEntry:
    source = r.get("source_interval_id")
    return ToilLedgerEntry(
        entry_id=int(r["entry_id"]),
        employee_id=int(r["employee_id"]),
        hours_earned=to_decimal(r["hours_earned"]),
        hours_used=to_decimal(r["hours_used"]),
        earned_date=r["earned_date"],
        expiry_date=r["expiry_date"],
        is_expired=bool(r["is_expired"]),
        source_interval_id=int(source) if source is not None else None,
        note=r.get("note"),
        created_at=r.get("created_at"),
    )


class MySQLToilLedgerRepository(ToilLedgerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        hours_earned: Decimal,
        earned_date: datetime,
        expiry_date: datetime,
        source_interval_id: Optional[int] = None,
        note: Optional[str] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO toil_ledger_entries(
                        employee_id, hours_earned, hours_used, earned_date, expiry_date,
                        is_expired, source_interval_id, note
                    )
                    VALUES(%s,%s,0,%s,%s,0,%s,%s)
                    """,
                    (int(employee_id), hours_earned, earned_date, expiry_date, source_interval_id, note),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise DuplicateSourceInterval(
                    f"Attendance interval {source_interval_id} already has a ledger entry"
                ) from e
            raise

    def get_by_id(self, entry_id: int) -> Optional[ToilLedgerEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM toil_ledger_entries WHERE entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def find_by_source_interval(self, source_interval_id: int) -> Optional[ToilLedgerEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM toil_ledger_entries WHERE source_interval_id=%s",
                (int(source_interval_id),),
            )
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def list_for_employee(self, employee_id: int) -> Sequence[ToilLedgerEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM toil_ledger_entries
                WHERE employee_id=%s
                ORDER BY earned_date DESC, entry_id DESC
                """,
                (int(employee_id),),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def list_active(self, employee_id: int) -> Sequence[ToilLedgerEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM toil_ledger_entries
                WHERE employee_id=%s AND is_expired=0 AND hours_remaining > 0
                ORDER BY expiry_date ASC, entry_id ASC
                """,
                (int(employee_id),),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def add_usage(self, *, entry_id: int, hours: Decimal) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Conditional update: the row only changes if it still holds enough hours.
            cur.execute(
                """
                UPDATE toil_ledger_entries
                SET hours_used = hours_used + %s
                WHERE entry_id=%s AND hours_earned - hours_used >= %s
                """,
                (hours, int(entry_id), hours),
            )
            return cur.rowcount > 0

    def add_usages(self, allocations: Sequence[Allocation]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            for a in allocations:
                cur.execute(
                    """
                    UPDATE toil_ledger_entries
                    SET hours_used = hours_used + %s
                    WHERE entry_id=%s AND hours_earned - hours_used >= %s
                    """,
                    (a.hours, int(a.entry_id), a.hours),
                )
                if cur.rowcount == 0:
                    # Raising inside db_cursor rolls back the earlier updates.
                    raise OverDeduction(f"TOIL entry {a.entry_id} cannot cover {a.hours}h")

    def list_due_for_expiry(self, now: datetime) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id
                FROM toil_ledger_entries
                WHERE is_expired=0 AND expiry_date <= %s AND hours_remaining > 0
                ORDER BY entry_id ASC
                """,
                (now,),
            )
            return [int(r["entry_id"]) for r in fetchall(cur)]

    def mark_expired(self, entry_ids: Sequence[int]) -> int:
        ids = [int(i) for i in entry_ids]
        if not ids:
            return 0
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE toil_ledger_entries SET is_expired=1 WHERE is_expired=0 AND entry_id IN ({placeholders})",
                tuple(ids),
            )
            return int(cur.rowcount)
