from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Protocol, Sequence

from .model import Teacher


class TeacherRepository(Protocol):
    """Repository interface for Teacher records.

    Services depend on this interface, not on a concrete backend.
    """

    def list_teachers(self) -> Sequence[Teacher]:
        raise NotImplementedError

    def get_teacher(self, teacher_id: str) -> Optional[Teacher]:
        raise NotImplementedError

    def create_teacher(self, *, name: str, hourly_rate: Decimal, max_billable_hours: Decimal) -> Teacher:
        raise NotImplementedError

    def update_teacher(self, teacher_id: str, **fields: Any) -> Optional[Teacher]:
        """Merge the given fields into the record; unspecified fields keep their value."""

        raise NotImplementedError

    def delete_teacher(self, teacher_id: str) -> bool:
        raise NotImplementedError
