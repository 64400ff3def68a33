from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Teacher:
    """Domain entity: a staff member's billing parameters and live check-in status.

    Invariant: ``is_checked_in`` is True exactly when ``current_check_in_time`` is set.
    """

    id: str
    name: str
    hourly_rate: Decimal
    max_billable_hours: Decimal
    is_checked_in: bool = False
    current_check_in_time: Optional[datetime] = None


# Fields an admin may change through an update; status fields belong to check-in/out.
EDITABLE_FIELDS = frozenset({"name", "hourly_rate", "max_billable_hours"})
STATUS_FIELDS = frozenset({"is_checked_in", "current_check_in_time"})
