from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .admin.controller import register as register_admin
from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .health.controller import register as register_health
from .leaves.controller import register as register_leaves
from .users.controller import register as register_users

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger("attendance_api").setLevel(level)


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass ``container`` to run against already-built repositories (tests);
    otherwise a MySQL-backed container is built from the settings module.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    app.logger.setLevel(logging.getLogger().level)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(
            db_config=db_config,
            token_secret=getattr(settings, "JWT_SECRET", app.secret_key),
            token_ttl_minutes=int(getattr(settings, "TOKEN_TTL_MINUTES", 60 * 24)),
        )
        app.logger.info("settings=%s db=%s", settings_module, container.conn.config.describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn, schema_path=SCHEMA_PATH)
            app.logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_users(container.conn)

    register_error_handlers(app)
    register_health(app, container)
    register_users(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_admin(app, container)

    return app
