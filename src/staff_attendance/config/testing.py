import os

SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_attendance_test"),
}

FIREBASE_SERVICE_ACCOUNT_KEY = ""
FIREBASE_SERVICE_ACCOUNT_KEY_PATH = ""

APP_TIMEZONE = ""

ADMIN_AUTH = "password"
ADMIN_PASSWORD_HASH = ""
ADMIN_PASSWORD = "admin-test"
ADMIN_EMAILS: list[str] = []

REPORT_TITLE = "Attendance System"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
