from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import HolidayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Holiday
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, name, holiday_date, holiday_type, is_recurring, description
                FROM holidays
                ORDER BY holiday_date ASC
                """
            )
            rows = fetchall(cur)
            return [
                Holiday(
                    holiday_id=int(r["holiday_id"]),
                    name=r["name"],
                    holiday_date=r["holiday_date"],
                    holiday_type=HolidayType(r["holiday_type"]),
                    is_recurring=bool(r["is_recurring"]),
                    description=r.get("description"),
                )
                for r in rows
            ]

    def create(
        self,
        *,
        name: str,
        holiday_date: date,
        holiday_type: HolidayType = HolidayType.PUBLIC,
        is_recurring: bool = False,
        description: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO holidays(name, holiday_date, holiday_type, is_recurring, description)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, holiday_date, holiday_type.value, int(bool(is_recurring)), description),
            )
            return int(cur.lastrowid)
