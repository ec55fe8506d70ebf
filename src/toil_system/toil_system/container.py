from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .core.enums import StorageBackend
from .core.policy import ToilPolicy
from .database.connection import DBConfig, DatabaseConnection
from .holidays.calendar import RepositoryHolidayCalendar
from .holidays.memory_holiday_repository import InMemoryHolidayRepository
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .toil.approvals import StaticWorkApprovals, WorkApprovalProvider
from .toil.ledger import ToilLedger
from .toil.locks import EmployeeLocks, MySQLEmployeeLocks, ThreadEmployeeLocks
from .toil.memory_toil_repository import InMemoryToilLedgerRepository
from .toil.mysql_toil_repository import MySQLToilLedgerRepository
from .toil.repository import ToilLedgerRepository
from .toil.service import ToilService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    policy: ToilPolicy

    attendance_repo: AttendanceRepository
    holidays_repo: HolidayRepository
    toil_repo: ToilLedgerRepository

    toil_ledger: ToilLedger
    toil_service: ToilService


def build_container(
    *,
    db_config: Optional[Mapping[str, Any]] = None,
    toil_policy: Optional[Mapping[str, Any]] = None,
    backend: str = StorageBackend.MYSQL.value,
    approvals: Optional[WorkApprovalProvider] = None,
) -> Container:
    policy = ToilPolicy.from_settings(toil_policy)
    conn: Optional[DatabaseConnection] = None
    locks: EmployeeLocks

    if StorageBackend(backend) is StorageBackend.MYSQL:
        if db_config is None:
            raise ValueError("db_config is required for the mysql backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
        attendance_repo: AttendanceRepository = MySQLAttendanceRepository(conn)
        holidays_repo: HolidayRepository = MySQLHolidayRepository(conn)
        toil_repo: ToilLedgerRepository = MySQLToilLedgerRepository(conn)
        locks = MySQLEmployeeLocks(conn, timeout_seconds=policy.lock_timeout_seconds)
    else:
        attendance_repo = InMemoryAttendanceRepository()
        holidays_repo = InMemoryHolidayRepository()
        toil_repo = InMemoryToilLedgerRepository()
        locks = ThreadEmployeeLocks()

    toil_ledger = ToilLedger(toil_repo, policy=policy)
    toil_service = ToilService(
        attendance_repo,
        toil_ledger,
        RepositoryHolidayCalendar(holidays_repo),
        policy=policy,
        locks=locks,
        approvals=approvals or StaticWorkApprovals(),
    )

    return Container(
        conn=conn,
        policy=policy,
        attendance_repo=attendance_repo,
        holidays_repo=holidays_repo,
        toil_repo=toil_repo,
        toil_ledger=toil_ledger,
        toil_service=toil_service,
    )
