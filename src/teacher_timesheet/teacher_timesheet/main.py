from __future__ import annotations

import importlib
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import now_utc
from .common.web import register_error_handlers
from .container import build_container, build_storage
from .core.constants import DEFAULT_ADMIN_SESSION_HOURS, DEFAULT_PIN_LOCKOUT_SECONDS
from .core.enums import StorageBackend
from .database.bootstrap import apply_schema, default_schema_path, list_tables
from .payroll.controller import register as register_payroll
from .settings.controller import register as register_settings
from .storage.repository import Storage
from .teachers.controller import register as register_teachers
from .time_entries.controller import register as register_time_entries

logger = logging.getLogger(__name__)

_SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "STORAGE_BACKEND",
    "DB_CONFIG",
    "AUTO_INIT_DB",
    "LOG_LEVEL",
    "ADMIN_SESSION_HOURS",
    "PIN_MAX_FAILED_ATTEMPTS",
    "PIN_LOCKOUT_SECONDS",
    "RESET_REQUIRES_ADMIN",
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(
    settings_module: Optional[str] = None,
    *,
    storage: Optional[Storage] = None,
    clock: Optional[Callable[[], datetime]] = None,
    **overrides,
) -> Flask:
    """Build the Flask app.

    ``settings_module`` defaults to the module picked by APP_ENV. ``storage`` lets
    callers (tests, scripts) hand in an already-built backend and ``clock`` a
    fixed time source; ``overrides`` win over values from the settings module.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    for name in _SETTING_NAMES:
        if hasattr(settings, name):
            app.config[name] = getattr(settings, name)
    app.config.update(overrides)

    app.secret_key = app.config["SECRET_KEY"]
    app.config.setdefault("STORAGE_BACKEND", StorageBackend.MEMORY.value)
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.permanent_session_lifetime = timedelta(
        hours=int(app.config.get("ADMIN_SESSION_HOURS", DEFAULT_ADMIN_SESSION_HOURS))
    )

    _configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    if storage is None:
        backend = app.config["STORAGE_BACKEND"]
        storage = build_storage(backend, db_config=app.config.get("DB_CONFIG"))
        if backend == StorageBackend.MYSQL.value and app.config.get("AUTO_INIT_DB"):
            apply_schema(storage.conn_factory, schema_path=default_schema_path())
            logger.info("Schema ready (tables=%d)", len(list_tables(storage.conn_factory)))

    logger.info("Starting with settings=%s storage=%s", settings_module, storage.backend_name)

    container = build_container(
        storage=storage,
        pin_max_failed_attempts=int(app.config.get("PIN_MAX_FAILED_ATTEMPTS", 0)),
        pin_lockout_seconds=int(app.config.get("PIN_LOCKOUT_SECONDS", DEFAULT_PIN_LOCKOUT_SECONDS)),
        clock=clock or now_utc,
    )
    app.extensions["teacher_timesheet"] = container

    register_error_handlers(app)
    register_settings(app, container)
    register_teachers(app, container)
    register_attendance(app, container)
    register_time_entries(app, container)
    register_payroll(app, container)

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"status": "ok", "storage": container.storage.backend_name})

    return app
