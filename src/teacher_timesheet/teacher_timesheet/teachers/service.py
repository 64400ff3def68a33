from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..attendance.locks import KeyedLocks
from ..common.validators import require_bounded_decimal, require_non_empty
from ..core.constants import MAX_BILLABLE_HOURS, MAX_HOURLY_RATE, MONEY_PLACES
from ..core.exceptions import NotFoundError, ValidationError
from ..storage.repository import Storage
from .model import EDITABLE_FIELDS, Teacher

logger = logging.getLogger(__name__)


def _hourly_rate(value: Any) -> Decimal:
    return require_bounded_decimal(value, "Hourly rate", places=MONEY_PLACES, maximum=MAX_HOURLY_RATE)


def _max_billable_hours(value: Any) -> Decimal:
    return require_bounded_decimal(value, "Max billable hours", places=MONEY_PLACES, maximum=MAX_BILLABLE_HOURS)


class TeacherService:
    """Use case: manage teacher records (admin).

    Deletes take the same per-teacher lock as check-in/check-out, so a session
    cannot be opened for a teacher that is being removed.
    """

    def __init__(self, storage: Storage, *, locks: Optional[KeyedLocks] = None):
        self._storage = storage
        self._locks = locks or KeyedLocks()

    def list_teachers(self) -> Sequence[Teacher]:
        return self._storage.list_teachers()

    def get_teacher(self, teacher_id: str) -> Teacher:
        teacher = self._storage.get_teacher(teacher_id)
        if not teacher:
            raise NotFoundError("Teacher not found")
        return teacher

    def create_teacher(self, *, name: Any, hourly_rate: Any, max_billable_hours: Any) -> Teacher:
        teacher = self._storage.create_teacher(
            name=require_non_empty(name, "Name"),
            hourly_rate=_hourly_rate(hourly_rate),
            max_billable_hours=_max_billable_hours(max_billable_hours),
        )
        logger.info("Created teacher %s (%s)", teacher.id, teacher.name)
        return teacher

    def update_teacher(self, teacher_id: str, **changes: Any) -> Teacher:
        """Apply an admin edit; only name, hourly_rate and max_billable_hours may change."""
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update: {', '.join(sorted(unknown))}")

        cleaned: dict[str, Any] = {}
        if "name" in changes:
            cleaned["name"] = require_non_empty(changes["name"], "Name")
        if "hourly_rate" in changes:
            cleaned["hourly_rate"] = _hourly_rate(changes["hourly_rate"])
        if "max_billable_hours" in changes:
            cleaned["max_billable_hours"] = _max_billable_hours(changes["max_billable_hours"])

        teacher = self._storage.update_teacher(teacher_id, **cleaned)
        if not teacher:
            raise NotFoundError("Teacher not found")
        if cleaned:
            logger.info("Updated teacher %s: %s", teacher_id, ", ".join(sorted(cleaned)))
        return teacher

    def delete_teacher(self, teacher_id: str) -> int:
        """Delete the teacher and every time entry that references it.

        Returns the number of time entries removed with the teacher.
        """
        if not self._storage.get_teacher(teacher_id):
            raise NotFoundError("Teacher not found")

        with self._locks.hold(teacher_id):
            removed = self._storage.delete_teacher_cascade(teacher_id)
        if removed is None:
            raise NotFoundError("Teacher not found")

        logger.info("Deleted teacher %s with %d time entries", teacher_id, removed)
        return removed
