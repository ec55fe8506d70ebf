from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, to_decimal
from .model import AttendanceInterval
from .repository import AttendanceRepository

_COLUMNS = """
    interval_id, employee_id, work_date, check_in_time, check_out_time,
    working_hours, overtime_hours, is_weekend_work, is_holiday_work,
    is_toil_eligible, toil_hours_earned
"""


def _row_to_interval(r: Dict[str, Any]) -> AttendanceInterval:
    return AttendanceInterval(
        interval_id=int(r["interval_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        working_hours=to_decimal(r["working_hours"]) if r.get("working_hours") is not None else None,
        overtime_hours=to_decimal(r["overtime_hours"]) if r.get("overtime_hours") is not None else None,
        is_weekend_work=bool(r.get("is_weekend_work")),
        is_holiday_work=bool(r.get("is_holiday_work")),
        is_toil_eligible=bool(r.get("is_toil_eligible")),
        toil_hours_earned=to_decimal(r.get("toil_hours_earned")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, interval_id: int) -> Optional[AttendanceInterval]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_intervals WHERE interval_id=%s",
                (int(interval_id),),
            )
            r = fetchone(cur)
            return _row_to_interval(r) if r else None

    def record_toil_classification(
        self,
        *,
        interval_id: int,
        working_hours: Decimal,
        overtime_hours: Decimal,
        is_weekend_work: bool,
        is_holiday_work: bool,
        is_toil_eligible: bool,
        toil_hours_earned: Decimal,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_intervals
                SET working_hours=%s, overtime_hours=%s, is_weekend_work=%s,
                    is_holiday_work=%s, is_toil_eligible=%s, toil_hours_earned=%s
                WHERE interval_id=%s
                """,
                (
                    working_hours,
                    overtime_hours,
                    int(is_weekend_work),
                    int(is_holiday_work),
                    int(is_toil_eligible),
                    toil_hours_earned,
                    int(interval_id),
                ),
            )
            return cur.rowcount > 0
