"""Teacher Timesheet package.

Check-in kiosk and PIN-gated admin API for teacher time tracking and pay.
Organized by feature modules (teachers, attendance, payroll, settings, ...)
with a thin Flask controller layer over service and storage layers.
"""
