from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one check-in/check-out session.

    ``check_out_time`` and the derived pay fields stay None while the session is open.
    """

    id: str
    teacher_id: str
    date: str
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    hours_worked: Optional[Decimal] = None
    billable_hours: Optional[Decimal] = None
    pay: Optional[Decimal] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None


@dataclass(frozen=True)
class TimesheetRow:
    """Read-model for the timesheet export (completed entries joined to their teacher)."""

    teacher_name: str
    date: str
    check_in_time: datetime
    check_out_time: datetime
    hours_worked: Optional[Decimal]
    billable_hours: Optional[Decimal]
    hourly_rate: Decimal
    pay: Optional[Decimal]


UPDATABLE_FIELDS = frozenset({"check_out_time", "hours_worked", "billable_hours", "pay"})
