from datetime import datetime, timedelta, timezone
from decimal import Decimal

from src.teacher_timesheet.teacher_timesheet.payroll.calculator.standard_calculator import (
    CappedHourlyCalculator,
    capped_pay,
    elapsed_hours,
)

START = datetime(2025, 1, 6, 8, 0, tzinfo=timezone.utc)


def _compute(hours: float, *, rate: str, cap: str):
    return CappedHourlyCalculator().compute(
        check_in_time=START,
        check_out_time=START + timedelta(hours=hours),
        hourly_rate=Decimal(rate),
        max_billable_hours=Decimal(cap),
    )


def test_hours_over_cap_are_not_billed():
    result = _compute(10, rate="20.00", cap="8")

    assert result.hours_worked == Decimal("10")
    assert result.billable_hours == Decimal("8")
    assert result.pay == Decimal("160.00")


def test_hours_under_cap_are_billed_in_full():
    result = _compute(4.5, rate="15.50", cap="6")

    assert result.billable_hours == Decimal("4.5")
    assert result.pay == Decimal("69.75")


def test_pay_is_rounded_to_cents():
    # 20 minutes at 10.00/h = 3.333...
    result = _compute(1 / 3, rate="10.00", cap="8")

    assert result.pay == Decimal("3.33")
    assert result.pay.as_tuple().exponent == -2


def test_negative_elapsed_time_is_clamped_to_zero():
    assert elapsed_hours(START, START - timedelta(minutes=5)) == Decimal(0)


def test_elapsed_hours_keeps_sub_second_precision():
    hours = elapsed_hours(START, START + timedelta(hours=2, seconds=1, microseconds=500000))
    expected = Decimal(2) + Decimal("1.5") / Decimal(3600)

    assert abs(hours - expected) < Decimal("0.000001")


def test_capped_pay_with_zero_hours():
    result = capped_pay(Decimal(0), hourly_rate=Decimal("25.00"), max_billable_hours=Decimal("8"))

    assert result.billable_hours == Decimal(0)
    assert result.pay == Decimal("0.00")
