"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

PIN_MIN_LENGTH = 4
PIN_MAX_LENGTH = 6

MONEY_PLACES = Decimal("0.01")
HOURS_PLACES = Decimal("0.000001")
SECONDS_PER_HOUR = Decimal(3600)

# column limits in database/schema.sql: DECIMAL(10, 2) and DECIMAL(6, 2)
MAX_HOURLY_RATE = Decimal("99999999.99")
MAX_BILLABLE_HOURS = Decimal("9999.99")

DEFAULT_ADMIN_SESSION_HOURS = 12
DEFAULT_PIN_LOCKOUT_SECONDS = 300
DEFAULT_REPORT_DAYS = 7

UNKNOWN_TEACHER_NAME = "Unknown"
