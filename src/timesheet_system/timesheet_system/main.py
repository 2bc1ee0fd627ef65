from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .admin_profile.controller import register as register_admin_profile
from .common.web import register_error_handlers
from .container import STORAGE_MYSQL, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users
from .work_entries.controller import register as register_work_entries

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"

SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "STORAGE_BACKEND",
    "DATA_DIR",
    "WORK_ENTRIES_FILE",
    "USERS_FILE",
    "DB_CONFIG",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
    "DEFAULT_HOURLY_RATE",
    "ADMIN_TOKEN_TTL_MINUTES",
    "DEFAULT_LOCALE",
    "SINGLE_OPEN_ENTRY",
    "MAX_PHOTO_BYTES",
    "SEED_ADMIN_EMAIL",
    "SEED_ADMIN_PASSWORD",
)


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    settings_module = importlib.import_module(get_settings_module())
    settings = {name: getattr(settings_module, name) for name in SETTING_NAMES if hasattr(settings_module, name)}
    settings["SETTINGS_MODULE"] = settings_module.__name__
    settings.update(overrides or {})
    return settings


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    settings = load_settings(overrides)

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.config["DEFAULT_LOCALE"] = settings.get("DEFAULT_LOCALE", "en")
    app.config["MAX_CONTENT_LENGTH"] = 4 * int(settings.get("MAX_PHOTO_BYTES", 5 * 1024 * 1024))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(
        "settings=%s storage=%s",
        settings["SETTINGS_MODULE"],
        settings.get("STORAGE_BACKEND", "json"),
    )

    if str(settings.get("STORAGE_BACKEND", "json")).lower() == STORAGE_MYSQL and settings.get("AUTO_INIT_DB"):
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings["DB_CONFIG"]))
        apply_schema(conn, schema_path=SCHEMA_PATH)
        logger.info("Schema ready on %s (tables=%d)", conn.config.describe(), len(list_tables(conn)))

    # The JSON back-end always seeds its users file; MySQL only on request.
    seed = str(settings.get("STORAGE_BACKEND", "json")).lower() != STORAGE_MYSQL or bool(settings.get("AUTO_SEED_DB"))
    container = build_container(settings, seed_users=seed)
    app.extensions["timesheet_container"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_work_entries(app, container)
    register_payroll(app, container)
    register_admin_profile(app, container)

    return app
