from __future__ import annotations

from typing import Optional, Sequence

from ..storage.repository import Storage
from .model import TimeEntry


class TimeEntryService:
    def __init__(self, storage: Storage):
        self._storage = storage

    def list_entries(self, *, teacher_id: Optional[str] = None, date: Optional[str] = None) -> Sequence[TimeEntry]:
        """Filter by teacher, else by date, else everything. teacher_id wins when both are given."""
        if teacher_id:
            return self._storage.list_time_entries_by_teacher(teacher_id)
        if date:
            return self._storage.list_time_entries_by_date(date)
        return self._storage.list_time_entries()
