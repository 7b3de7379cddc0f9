"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"
DATETIME_FORMAT = f"{DATE_FORMAT} {TIME_FORMAT}"

REPORT_COLUMNS = [
    "Employee ID",
    "Company Name",
    "Employee Name",
    "Date",
    "Time",
    "Latitude",
    "Longitude",
    "Status",
]

FULL_REPORT_SHEET = "Attendance Report"
DATE_REPORT_SHEET = "Date-Wise Report"
EMPLOYEE_REPORT_SHEET = "Employee-Wise Report"

ATTENDANCE_COLLECTION = "attendance"
EMPLOYEES_COLLECTION = "employees"

SESSION_STATE_KEY = "attendance_state"
