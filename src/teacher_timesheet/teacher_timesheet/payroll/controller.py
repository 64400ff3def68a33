from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serializers import format_decimal, report_row_to_json
from ..common.validators import optional_int_in_range
from ..common.web import admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/export/timesheet", methods=["GET"], endpoint="export_timesheet")
    @admin_required
    def export_timesheet():
        month = optional_int_in_range(request.args.get("month"), "Month", 1, 12)
        year = optional_int_in_range(request.args.get("year"), "Year", 1000, 9999)
        rows = container.payroll_report_service.export_timesheet(month=month, year=year)
        return jsonify([report_row_to_json(r) for r in rows])

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @admin_required
    def dashboard_stats():
        s = container.payroll_report_service.dashboard_stats()
        return jsonify(
            {
                "teacherCount": s.teacher_count,
                "checkedInCount": s.checked_in_count,
                "todayHours": format_decimal(s.today_hours),
                "todayPay": format_decimal(s.today_pay),
                "weeklyHours": format_decimal(s.weekly_hours),
                "weeklyBillableHours": format_decimal(s.weekly_billable_hours),
                "weeklyPay": format_decimal(s.weekly_pay),
                "avgDailyHours": format_decimal(s.avg_daily_hours),
                "teachers": [
                    {
                        "id": t.teacher_id,
                        "name": t.name,
                        "isCheckedIn": t.is_checked_in,
                        "todayHours": format_decimal(t.today_hours),
                        "billableHours": format_decimal(t.billable_hours),
                        "pay": format_decimal(t.pay),
                        "atLimit": t.at_limit,
                    }
                    for t in s.teachers
                ],
            }
        )
