import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module, development by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "staff_attendance.config.production"

    if env in {"test", "testing"}:
        return "staff_attendance.config.testing"

    return "staff_attendance.config.development"
