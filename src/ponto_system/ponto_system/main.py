from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .core.constants import (
    DEFAULT_SESSION_DAYS,
    DEFAULT_TIMEZONE,
    GEOLOCATION_MAX_TIMEOUT_SECONDS,
    GEOLOCATION_MIN_TIMEOUT_SECONDS,
)
from .core.exceptions import ExternalServiceError
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .database.health import health_check

from .container import Container, build_container
from .punches.controller import register as register_punches
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

# settings forwarded from the settings module into app.config
_SETTING_DEFAULTS = {
    "DEBUG": False,
    "TESTING": False,
    "TIMEZONE": DEFAULT_TIMEZONE,
    "PUNCH_SCHEMA": "four_state",
    "LUNCH_POLICY": "exclude",
    "ALLOW_FUTURE_PUNCH": False,
    "REQUIRE_LOCATION": False,
    "GEOLOCATION_TIMEOUT_SECONDS": GEOLOCATION_MAX_TIMEOUT_SECONDS,
    "SESSION_DAYS": DEFAULT_SESSION_DAYS,
}


def clamp_geolocation_timeout(value) -> int:
    try:
        seconds = int(value)
    except (TypeError, ValueError):
        return GEOLOCATION_MAX_TIMEOUT_SECONDS
    return max(GEOLOCATION_MIN_TIMEOUT_SECONDS, min(seconds, GEOLOCATION_MAX_TIMEOUT_SECONDS))


def create_app(container: Optional[Container] = None, **overrides) -> Flask:
    """Flask app factory.

    A prebuilt `container` skips database bootstrap entirely (used by tests).
    `overrides` replace values read from the settings module.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = overrides.get("SECRET_KEY", getattr(settings, "SECRET_KEY"))
    db_config = getattr(settings, "DB_CONFIG")

    for key, default in _SETTING_DEFAULTS.items():
        app.config[key] = overrides.get(key, getattr(settings, key, default))
    app.config["GEOLOCATION_TIMEOUT_SECONDS"] = clamp_geolocation_timeout(app.config["GEOLOCATION_TIMEOUT_SECONDS"])

    if not app.config["TESTING"]:
        logging.basicConfig(
            level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        container = build_container(db_config=db_config, settings=dict(app.config))

    register_users(app, container)
    register_punches(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def api_health():
        result = health_check(container.conn)
        return jsonify(result), (200 if result["status"] == "healthy" else 503)

    @app.errorhandler(ExternalServiceError)
    def handle_external_service_error(e: ExternalServiceError):
        return jsonify({"success": False, "message": str(e)}), 503

    return app
