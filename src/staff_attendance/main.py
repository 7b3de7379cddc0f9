from __future__ import annotations

import importlib
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def load_settings(settings_module: Optional[str] = None):
    load_dotenv(override=False)
    return importlib.import_module(settings_module or get_settings_module())


def create_app(*, settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    settings = load_settings(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    backend = str(getattr(settings, "STORE_BACKEND", "mysql")).lower()
    if container is None and backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        from .database.bootstrap import apply_schema

        apply_schema(dict(getattr(settings, "DB_CONFIG")))

    container = container or build_container(settings)
    logger.info(
        "staff-attendance settings=%s backend=%s timezone=%s",
        settings.__name__,
        container.backend,
        getattr(container.tz, "key", None) or "server-local",
    )

    register_attendance(app, container)
    register_employees(app, container)
    register_reports(app, container)

    app.extensions["staff_attendance"] = container
    return app


def run() -> None:
    app = create_app()
    app.run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
        debug=app.config["DEBUG"],
    )


if __name__ == "__main__":
    run()
