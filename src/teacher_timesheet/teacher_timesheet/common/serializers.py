"""JSON projections of domain records.

Decimals leave the API as strings so that currency values never pass through
binary floating point on the wire.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from .datetime_utils import isoformat


def format_decimal(value: Optional[Decimal]) -> Optional[str]:
    if value is None:
        return None
    return format(value, "f")


def teacher_to_json(teacher) -> dict:
    return {
        "id": teacher.id,
        "name": teacher.name,
        "hourlyRate": format_decimal(teacher.hourly_rate),
        "maxBillableHours": format_decimal(teacher.max_billable_hours),
        "isCheckedIn": teacher.is_checked_in,
        "currentCheckInTime": isoformat(teacher.current_check_in_time),
    }


def time_entry_to_json(entry) -> dict:
    return {
        "id": entry.id,
        "teacherId": entry.teacher_id,
        "date": entry.date,
        "checkInTime": isoformat(entry.check_in_time),
        "checkOutTime": isoformat(entry.check_out_time),
        "hoursWorked": format_decimal(entry.hours_worked),
        "billableHours": format_decimal(entry.billable_hours),
        "pay": format_decimal(entry.pay),
    }


def report_row_to_json(row) -> dict:
    return {
        "teacherName": row.teacher_name,
        "date": row.date,
        "checkInTime": isoformat(row.check_in_time),
        "checkOutTime": isoformat(row.check_out_time),
        "hoursWorked": format_decimal(row.hours_worked),
        "billableHours": format_decimal(row.billable_hours),
        "hourlyRate": format_decimal(row.hourly_rate),
        "pay": format_decimal(row.pay),
    }
