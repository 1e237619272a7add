from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.web import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_admin_user, list_tables
from .payroll.late_policy import build_late_policy
from .attendance.controller import register as register_attendance
from .bonus.controller import register as register_bonus
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll

logger = logging.getLogger("payroll_system")

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    db_config = getattr(settings, "DB_CONFIG")

    if container is None:
        logger.info(
            "[payroll-system] settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            ensure_admin_user(
                db_config,
                code=getattr(settings, "ADMIN_CODE", "admin"),
                password=getattr(settings, "ADMIN_PASSWORD", "admin123"),
            )
            logger.info("[payroll-system] schema ready (tables=%d)", len(list_tables(db_config)))

        late_policy = build_late_policy(
            getattr(settings, "LATE_DEDUCTION_POLICY", "recorded"),
            minutes_per_day=int(getattr(settings, "LATE_MINUTES_PER_DAY", 480)),
        )
        container = build_container(db_config=db_config, late_policy=late_policy)

    register_error_handlers(app)
    register_employees(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_bonus(app, container)

    return app
