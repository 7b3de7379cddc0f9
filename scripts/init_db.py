"""Create the MySQL database and tables from schema.sql."""

from __future__ import annotations

from staff_attendance.database.bootstrap import apply_schema, list_tables
from staff_attendance.database.connection import DBConfig
from staff_attendance.main import load_settings


def main() -> None:
    settings = load_settings()
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    tables = list_tables(db_config)
    print(f"OK: Applied schema.sql -> {DBConfig.from_dict(db_config).describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
