from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.logging_setup import setup_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .guilds.controller import register as register_guilds
from .members.controller import register as register_members
from .notifications.controller import register as register_notifications
from .sessions.controller import register as register_sessions

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def rollup_options_from(settings) -> dict:
    return {
        "day_of_week": getattr(settings, "SUMMARY_CRON_DAY_OF_WEEK", "mon"),
        "hour": int(getattr(settings, "SUMMARY_CRON_HOUR", 10)),
        "minute": int(getattr(settings, "SUMMARY_CRON_MINUTE", 0)),
        "reset_delay_seconds": int(getattr(settings, "RESET_DELAY_SECONDS", 120)),
        "timezone": getattr(settings, "SCHEDULER_TIMEZONE", None) or None,
    }


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    # pytest owns the root logger under test.
    if not app.config["TESTING"]:
        setup_logging(
            getattr(settings, "LOG_LEVEL", "INFO"),
            json_output=bool(getattr(settings, "LOG_JSON", True)),
        )
    logger.info("Starting work-time service (settings=%s)", settings_module)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(db_config=db_config, rollup_options=rollup_options_from(settings))

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%d)", len(list_tables(container.conn)))

    app.extensions["worktime"] = container

    register_sessions(app, container)
    register_guilds(app, container)
    register_members(app, container)
    register_notifications(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "active_sessions": len(container.registry)}), 200

    if bool(getattr(settings, "SCHEDULER_ENABLED", False)):
        container.rollup.start()
        atexit.register(container.rollup.shutdown)

    return app
