from __future__ import annotations

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import HOURS_PLACES, MONEY_PLACES, SECONDS_PER_HOUR
from .base import PayrollCalculator, PayResult


def elapsed_hours(start: datetime, end: datetime) -> Decimal:
    """Wall-clock hours between two instants, never below 0."""
    delta: timedelta = end - start
    seconds = Decimal(delta.days * 86400 + delta.seconds) + Decimal(delta.microseconds) / Decimal(1_000_000)
    hours = (seconds / SECONDS_PER_HOUR).quantize(HOURS_PLACES, rounding=ROUND_HALF_UP)
    return max(hours, Decimal(0))


def capped_pay(hours_worked: Decimal, *, hourly_rate: Decimal, max_billable_hours: Decimal) -> PayResult:
    billable = min(hours_worked, max_billable_hours)
    pay = (billable * hourly_rate).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)
    return PayResult(hours_worked=hours_worked, billable_hours=billable, pay=pay)


class CappedHourlyCalculator(PayrollCalculator):
    """Standard rule: billable = min(worked, cap); pay = billable * rate, rounded to cents."""

    def compute(
        self,
        *,
        check_in_time: datetime,
        check_out_time: datetime,
        hourly_rate: Decimal,
        max_billable_hours: Decimal,
    ) -> PayResult:
        hours = elapsed_hours(check_in_time, check_out_time)
        return capped_pay(hours, hourly_rate=hourly_rate, max_billable_hours=max_billable_hours)
