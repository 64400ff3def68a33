from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class PayResult:
    hours_worked: Decimal
    billable_hours: Decimal
    pay: Decimal


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(
        self,
        *,
        check_in_time: datetime,
        check_out_time: datetime,
        hourly_rate: Decimal,
        max_billable_hours: Decimal,
    ) -> PayResult:
        raise NotImplementedError
