from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from .model import TimeEntry


class TimeEntryRepository(Protocol):
    def list_time_entries(self) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def list_time_entries_by_teacher(self, teacher_id: str) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def list_time_entries_by_date(self, date: str) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def get_time_entry(self, entry_id: str) -> Optional[TimeEntry]:
        raise NotImplementedError

    def create_time_entry(self, *, teacher_id: str, date: str, check_in_time: datetime) -> TimeEntry:
        raise NotImplementedError

    def update_time_entry(self, entry_id: str, **fields: Any) -> Optional[TimeEntry]:
        raise NotImplementedError

    def delete_time_entries_by_teacher(self, teacher_id: str) -> int:
        raise NotImplementedError
