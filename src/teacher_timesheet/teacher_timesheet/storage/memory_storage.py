from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..core.exceptions import ConflictError
from ..settings.model import AppSettings
from ..settings.pin_hashing import verify_pin
from ..teachers.model import EDITABLE_FIELDS, STATUS_FIELDS, Teacher
from ..time_entries.model import UPDATABLE_FIELDS, TimeEntry


def _new_id() -> str:
    return str(uuid.uuid4())


def _check_fields(fields: dict, allowed: frozenset) -> None:
    unknown = set(fields) - allowed
    if unknown:
        raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")


class InMemoryStorage:
    """Reference storage: dicts keyed by id, scoped to one process.

    Records are immutable dataclasses, so callers never observe a half-applied update.
    """

    backend_name = "memory"

    def __init__(self):
        self._lock = threading.RLock()
        self._teachers: dict[str, Teacher] = {}
        self._time_entries: dict[str, TimeEntry] = {}
        self._settings: Optional[AppSettings] = None

    # Teachers
    def list_teachers(self) -> Sequence[Teacher]:
        with self._lock:
            return sorted(self._teachers.values(), key=lambda t: t.name.casefold())

    def get_teacher(self, teacher_id: str) -> Optional[Teacher]:
        with self._lock:
            return self._teachers.get(teacher_id)

    def create_teacher(self, *, name: str, hourly_rate: Decimal, max_billable_hours: Decimal) -> Teacher:
        teacher = Teacher(
            id=_new_id(),
            name=name,
            hourly_rate=hourly_rate,
            max_billable_hours=max_billable_hours,
            is_checked_in=False,
            current_check_in_time=None,
        )
        with self._lock:
            self._teachers[teacher.id] = teacher
        return teacher

    def update_teacher(self, teacher_id: str, **fields: Any) -> Optional[Teacher]:
        _check_fields(fields, EDITABLE_FIELDS | STATUS_FIELDS)
        with self._lock:
            teacher = self._teachers.get(teacher_id)
            if teacher is None:
                return None
            updated = replace(teacher, **fields)
            self._teachers[teacher_id] = updated
            return updated

    def delete_teacher(self, teacher_id: str) -> bool:
        with self._lock:
            return self._teachers.pop(teacher_id, None) is not None

    # Time entries
    def list_time_entries(self) -> Sequence[TimeEntry]:
        with self._lock:
            return list(self._time_entries.values())

    def list_time_entries_by_teacher(self, teacher_id: str) -> Sequence[TimeEntry]:
        with self._lock:
            return [e for e in self._time_entries.values() if e.teacher_id == teacher_id]

    def list_time_entries_by_date(self, date: str) -> Sequence[TimeEntry]:
        with self._lock:
            return [e for e in self._time_entries.values() if e.date == date]

    def get_time_entry(self, entry_id: str) -> Optional[TimeEntry]:
        with self._lock:
            return self._time_entries.get(entry_id)

    def create_time_entry(self, *, teacher_id: str, date: str, check_in_time: datetime) -> TimeEntry:
        entry = TimeEntry(id=_new_id(), teacher_id=teacher_id, date=date, check_in_time=check_in_time)
        with self._lock:
            self._time_entries[entry.id] = entry
        return entry

    def update_time_entry(self, entry_id: str, **fields: Any) -> Optional[TimeEntry]:
        _check_fields(fields, UPDATABLE_FIELDS)
        with self._lock:
            entry = self._time_entries.get(entry_id)
            if entry is None:
                return None
            updated = replace(entry, **fields)
            self._time_entries[entry_id] = updated
            return updated

    def delete_time_entries_by_teacher(self, teacher_id: str) -> int:
        with self._lock:
            doomed = [k for k, e in self._time_entries.items() if e.teacher_id == teacher_id]
            for k in doomed:
                del self._time_entries[k]
            return len(doomed)

    # App settings
    def get_app_settings(self) -> Optional[AppSettings]:
        with self._lock:
            return self._settings

    def create_app_settings(self, pin_hash: str) -> AppSettings:
        with self._lock:
            if self._settings is not None:
                raise ConflictError("PIN already set up")
            self._settings = AppSettings(id=_new_id(), pin_hash=pin_hash)
            return self._settings

    def update_app_settings(self, pin_hash: str) -> Optional[AppSettings]:
        with self._lock:
            if self._settings is None:
                return None
            self._settings = replace(self._settings, pin_hash=pin_hash)
            return self._settings

    def validate_pin(self, candidate_pin: str) -> bool:
        settings = self.get_app_settings()
        if settings is None:
            return False
        return verify_pin(settings.pin_hash, candidate_pin)

    def delete_teacher_cascade(self, teacher_id: str) -> Optional[int]:
        with self._lock:
            if teacher_id not in self._teachers:
                return None
            removed = self.delete_time_entries_by_teacher(teacher_id)
            del self._teachers[teacher_id]
            return removed

    def reset_all_data(self) -> None:
        with self._lock:
            self._teachers.clear()
            self._time_entries.clear()
            self._settings = None
