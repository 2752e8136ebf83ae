from __future__ import annotations

import importlib
from pathlib import Path
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .calendar_days.controller import register as register_calendar
from .container import Container, build_container
from .core.exceptions import DomainError, NotFoundError, StorageError, ValidationError
from .core.logging_config import configure_logging, get_logger
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .invoice.controller import register as register_invoices
from .leave.controller import register as register_leaves
from .payroll.controller import register as register_payroll

logger = get_logger(__name__)


def _register_error_handlers(app: Flask) -> None:
    def failure(exc: Exception, status: int):
        return jsonify({"success": False, "message": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation(exc: ValidationError):
        return failure(exc, 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(exc: NotFoundError):
        return failure(exc, 404)

    @app.errorhandler(StorageError)
    def handle_storage(exc: StorageError):
        logger.error("storage failure: %s", exc)
        return failure(exc, 503)

    @app.errorhandler(DomainError)
    def handle_domain(exc: DomainError):
        return failure(exc, 400)


def create_app(*, container: Optional[Container] = None, settings: Optional[ModuleType] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = settings or importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), json_output=bool(getattr(settings, "LOG_JSON", False)))
    logger.info(
        "starting with settings=%s db=%s",
        getattr(settings, "__name__", settings_module),
        DBConfig.from_dict(db_config).describe(),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(db_config=db_config, payroll=getattr(settings, "PAYROLL", None))

    _register_error_handlers(app)

    register_calendar(app, container)
    register_leaves(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_invoices(app, container)

    return app
