from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional

from ..common.datetime_utils import as_utc, calendar_date, now_utc
from ..core.constants import DEFAULT_REPORT_DAYS, HOURS_PLACES, MONEY_PLACES, UNKNOWN_TEACHER_NAME
from ..storage.repository import Storage
from ..time_entries.model import TimesheetRow
from .calculator.standard_calculator import capped_pay, elapsed_hours


@dataclass(frozen=True)
class TeacherDayStats:
    teacher_id: str
    name: str
    is_checked_in: bool
    today_hours: Decimal
    billable_hours: Decimal
    pay: Decimal

    @property
    def at_limit(self) -> bool:
        return self.billable_hours < self.today_hours


@dataclass(frozen=True)
class DashboardStats:
    teacher_count: int
    checked_in_count: int
    today_hours: Decimal
    today_pay: Decimal
    weekly_hours: Decimal
    weekly_billable_hours: Decimal
    weekly_pay: Decimal
    avg_daily_hours: Decimal
    teachers: list[TeacherDayStats] = field(default_factory=list)


def _in_period(entry_date: str, *, month: Optional[int], year: Optional[int]) -> bool:
    # entry_date is YYYY-MM-DD
    if year is not None and entry_date[:4] != f"{year:04d}":
        return False
    if month is not None and entry_date[5:7] != f"{month:02d}":
        return False
    return True


class PayrollReportService:
    """Read-only reporting over completed time entries: timesheet export and dashboard totals."""

    def __init__(self, storage: Storage, *, clock: Callable[[], datetime] = now_utc):
        self._storage = storage
        self._clock = clock

    def export_timesheet(self, *, month: Optional[int] = None, year: Optional[int] = None) -> list[TimesheetRow]:
        teachers = {t.id: t for t in self._storage.list_teachers()}

        rows: list[TimesheetRow] = []
        for e in self._storage.list_time_entries():
            if e.check_out_time is None or not _in_period(e.date, month=month, year=year):
                continue
            teacher = teachers.get(e.teacher_id)
            rows.append(
                TimesheetRow(
                    teacher_name=teacher.name if teacher else UNKNOWN_TEACHER_NAME,
                    date=e.date,
                    check_in_time=e.check_in_time,
                    check_out_time=e.check_out_time,
                    hours_worked=e.hours_worked,
                    billable_hours=e.billable_hours,
                    hourly_rate=teacher.hourly_rate if teacher else Decimal("0"),
                    pay=e.pay,
                )
            )

        # stable: same-day rows keep storage order
        rows.sort(key=lambda r: r.date, reverse=True)
        return rows

    def dashboard_stats(self, *, now: datetime | None = None) -> DashboardStats:
        now = as_utc(now or self._clock())
        today = calendar_date(now)
        week_start = calendar_date(now - timedelta(days=DEFAULT_REPORT_DAYS - 1))

        teachers = list(self._storage.list_teachers())
        by_id = {t.id: t for t in teachers}
        entries = list(self._storage.list_time_entries())

        today_hours = Decimal(0)
        today_pay = Decimal(0)
        per_teacher_hours: dict[str, Decimal] = {t.id: Decimal(0) for t in teachers}

        for e in entries:
            teacher = by_id.get(e.teacher_id)
            if e.hours_worked is not None and e.date == today:
                today_hours += e.hours_worked
                today_pay += e.pay or Decimal(0)
                if teacher:
                    per_teacher_hours[teacher.id] += e.hours_worked
            elif e.is_open and teacher and teacher.is_checked_in:
                # live session, including one that started before UTC midnight
                live = elapsed_hours(as_utc(e.check_in_time), now)
                today_hours += live
                today_pay += capped_pay(
                    live, hourly_rate=teacher.hourly_rate, max_billable_hours=teacher.max_billable_hours
                ).pay
                per_teacher_hours[teacher.id] += live

        week_entries = [e for e in entries if week_start <= e.date <= today]
        weekly_hours = sum((e.hours_worked or Decimal(0) for e in week_entries), Decimal(0))
        weekly_billable = sum((e.billable_hours or Decimal(0) for e in week_entries), Decimal(0))
        weekly_pay = sum((e.pay or Decimal(0) for e in week_entries), Decimal(0))

        teacher_stats = []
        for t in teachers:
            result = capped_pay(
                per_teacher_hours[t.id], hourly_rate=t.hourly_rate, max_billable_hours=t.max_billable_hours
            )
            teacher_stats.append(
                TeacherDayStats(
                    teacher_id=t.id,
                    name=t.name,
                    is_checked_in=t.is_checked_in,
                    today_hours=result.hours_worked,
                    billable_hours=result.billable_hours,
                    pay=result.pay,
                )
            )

        return DashboardStats(
            teacher_count=len(teachers),
            checked_in_count=sum(1 for t in teachers if t.is_checked_in),
            today_hours=today_hours.quantize(HOURS_PLACES, rounding=ROUND_HALF_UP),
            today_pay=today_pay.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP),
            weekly_hours=weekly_hours.quantize(HOURS_PLACES, rounding=ROUND_HALF_UP),
            weekly_billable_hours=weekly_billable.quantize(HOURS_PLACES, rounding=ROUND_HALF_UP),
            weekly_pay=weekly_pay.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP),
            avg_daily_hours=(weekly_hours / DEFAULT_REPORT_DAYS).quantize(HOURS_PLACES, rounding=ROUND_HALF_UP),
            teachers=teacher_stats,
        )
