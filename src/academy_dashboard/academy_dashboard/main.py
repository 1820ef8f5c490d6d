from __future__ import annotations

import importlib
import logging
import sys
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .catalog.controller import register as register_catalog
from .common.http import AcademyJSONProvider
from .container import Container, build_container
from .core.constants import BILLING_WEEKS_PER_MONTH
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .directory.controller import register as register_directory
from .payments.controller import register as register_payments

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if root.handlers:
        return  # respect existing setup
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.setLevel(level.upper())
    root.addHandler(handler)


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass ``container`` to run against pre-built repositories (tests); otherwise the
    settings module selected by ``APP_ENV`` provides the MySQL connection.
    """

    load_dotenv(override=False)
    app = Flask(__name__)
    app.json = AcademyJSONProvider(app)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config)
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            weeks_per_month=int(getattr(settings, "BILLING_WEEKS_PER_MONTH", BILLING_WEEKS_PER_MONTH)),
        )
        logger.info("Using settings=%s db=%s", settings_module, container.conn.describe())

    register_catalog(app, container)
    register_directory(app, container)
    register_attendance(app, container)
    register_payments(app, container)

    return app
