from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import as_utc, calendar_date, now_utc
from ..core.exceptions import ConflictError, NotFoundError
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import CappedHourlyCalculator
from ..storage.repository import Storage
from ..teachers.model import Teacher
from ..time_entries.model import TimeEntry
from .locks import KeyedLocks

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: teacher check-in / check-out and the pay derived at checkout.

    Each teacher's read-modify-write sequence runs under that teacher's lock, so
    two kiosks cannot open two sessions for the same teacher.
    """

    def __init__(
        self,
        storage: Storage,
        *,
        calculator: Optional[PayrollCalculator] = None,
        clock: Callable[[], datetime] = now_utc,
        locks: Optional[KeyedLocks] = None,
    ):
        self._storage = storage
        self._calculator = calculator or CappedHourlyCalculator()
        self._clock = clock
        self._locks = locks or KeyedLocks()

    def _require_teacher(self, teacher_id: str) -> Teacher:
        teacher = self._storage.get_teacher(teacher_id)
        if not teacher:
            raise NotFoundError("Teacher not found")
        return teacher

    def check_in(self, teacher_id: str, *, now: datetime | None = None) -> Teacher:
        with self._locks.hold(teacher_id):
            teacher = self._require_teacher(teacher_id)
            if teacher.is_checked_in:
                raise ConflictError("Teacher already checked in")

            now = as_utc(now or self._clock())
            updated = self._storage.update_teacher(teacher_id, is_checked_in=True, current_check_in_time=now)
            try:
                self._storage.create_time_entry(teacher_id=teacher_id, date=calendar_date(now), check_in_time=now)
            except Exception:
                # undo the status change; no session was recorded
                self._storage.update_teacher(teacher_id, is_checked_in=False, current_check_in_time=None)
                raise

        logger.info("Teacher %s checked in at %s", teacher_id, now.isoformat())
        return updated

    def check_out(self, teacher_id: str, *, now: datetime | None = None) -> Teacher:
        with self._locks.hold(teacher_id):
            teacher = self._require_teacher(teacher_id)
            if not teacher.is_checked_in or teacher.current_check_in_time is None:
                raise ConflictError("Teacher not checked in")

            now = as_utc(now or self._clock())
            result = self._calculator.compute(
                check_in_time=as_utc(teacher.current_check_in_time),
                check_out_time=now,
                hourly_rate=teacher.hourly_rate,
                max_billable_hours=teacher.max_billable_hours,
            )

            updated = self._storage.update_teacher(teacher_id, is_checked_in=False, current_check_in_time=None)

            entry = self._find_open_entry(teacher, today=calendar_date(now))
            if entry is None:
                logger.warning(
                    "Teacher %s checked out but no open time entry was found; nothing recorded", teacher_id
                )
                return updated

            try:
                self._storage.update_time_entry(
                    entry.id,
                    check_out_time=now,
                    hours_worked=result.hours_worked,
                    billable_hours=result.billable_hours,
                    pay=result.pay,
                )
            except Exception:
                self._storage.update_teacher(
                    teacher_id, is_checked_in=True, current_check_in_time=teacher.current_check_in_time
                )
                raise

        logger.info(
            "Teacher %s checked out: %s h worked, %s h billable, pay %s",
            teacher_id,
            result.hours_worked,
            result.billable_hours,
            result.pay,
        )
        return updated

    def _find_open_entry(self, teacher: Teacher, *, today: str) -> Optional[TimeEntry]:
        """Today's open entry; else the open entry started at the teacher's check-in instant."""
        open_entries = [e for e in self._storage.list_time_entries_by_teacher(teacher.id) if e.is_open]
        for e in open_entries:
            if e.date == today:
                return e

        started = teacher.current_check_in_time
        for e in open_entries:
            # session crossed midnight UTC
            if started is not None and as_utc(e.check_in_time) == as_utc(started):
                return e
        return None
