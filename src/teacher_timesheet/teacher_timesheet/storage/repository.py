from __future__ import annotations

from typing import Optional, Protocol

from ..settings.repository import SettingsRepository
from ..teachers.repository import TeacherRepository
from ..time_entries.repository import TimeEntryRepository


class Storage(TeacherRepository, TimeEntryRepository, SettingsRepository, Protocol):
    """Full storage contract: teachers, time entries and the settings singleton.

    Implementations: InMemoryStorage (reference) and MySQLStorage (durable).
    Both must behave identically from the caller's side.
    Teachers are listed by name (case-insensitive); ties keep no defined order.
    """

    backend_name: str

    def delete_teacher_cascade(self, teacher_id: str) -> Optional[int]:
        """Delete a teacher and its time entries as one step.

        Returns the number of entries removed, or None when the teacher does not exist.
        """

        raise NotImplementedError

    def reset_all_data(self) -> None:
        """Remove every teacher, time entry and the settings record."""

        raise NotImplementedError
