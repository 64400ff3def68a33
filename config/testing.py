SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "teacher_timesheet_test",
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

ADMIN_SESSION_HOURS = 12
PIN_MAX_FAILED_ATTEMPTS = 0
PIN_LOCKOUT_SECONDS = 300
RESET_REQUIRES_ADMIN = False
