from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.locks import KeyedLocks
from .attendance.service import AttendanceService
from .common.datetime_utils import now_utc
from .core.enums import StorageBackend
from .database.connection import DatabaseConnection, DBConfig
from .payroll.service import PayrollReportService
from .settings.service import PinService
from .settings.throttle import PinAttemptLimiter
from .storage.memory_storage import InMemoryStorage
from .storage.mysql_storage import MySQLStorage
from .storage.repository import Storage
from .teachers.service import TeacherService
from .time_entries.service import TimeEntryService


@dataclass(frozen=True)
class Container:
    storage: Storage

    teacher_service: TeacherService
    attendance_service: AttendanceService
    time_entry_service: TimeEntryService
    pin_service: PinService
    payroll_report_service: PayrollReportService


def build_storage(backend: str, *, db_config: Optional[dict] = None) -> Storage:
    backend = StorageBackend(backend)
    if backend is StorageBackend.MYSQL:
        return MySQLStorage(DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {})))
    return InMemoryStorage()


def build_container(
    *,
    storage: Storage,
    pin_max_failed_attempts: int = 0,
    pin_lockout_seconds: int = 300,
    clock: Callable[[], datetime] = now_utc,
) -> Container:
    teacher_locks = KeyedLocks()
    limiter = PinAttemptLimiter(max_attempts=pin_max_failed_attempts, lockout_seconds=pin_lockout_seconds)

    return Container(
        storage=storage,
        teacher_service=TeacherService(storage, locks=teacher_locks),
        attendance_service=AttendanceService(storage, clock=clock, locks=teacher_locks),
        time_entry_service=TimeEntryService(storage),
        pin_service=PinService(storage, limiter=limiter),
        payroll_report_service=PayrollReportService(storage, clock=clock),
    )
