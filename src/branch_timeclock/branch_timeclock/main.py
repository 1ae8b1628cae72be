from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .advances.controller import register as register_advances
from .attendance.controller import register as register_attendance
from .common.datetime_utils import load_timezone
from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema
from .database.connection import DBConfig
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll
from .reports.controller import register as register_reports


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app. Tests pass a container wired over in-memory repositories."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(DBConfig.from_dict(db_config), schema_path=schema_path)

        tz = load_timezone(getattr(settings, "TIMEZONE", None))
        container = build_container(db_config=db_config, tz=tz)

    register_error_handlers(app)
    register_attendance(app, container)
    register_advances(app, container)
    register_employees(app, container)
    register_payroll(app, container)
    register_reports(app, container)

    return app
