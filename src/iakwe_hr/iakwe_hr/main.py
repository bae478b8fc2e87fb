from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, g, jsonify

from config import get_settings_module

from .container import Container, build_container
from .core.exceptions import StoreError
from .common.web import actor_required, register_error_handlers
from .database.bootstrap import apply_schema, list_tables, seed_sample_employees
from .employees.controller import register as register_employees
from .leave.controller import register as register_leave

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _bootstrap_mysql(settings) -> None:
    db_config = dict(settings.DB_CONFIG)
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        seed_sample_employees(db_config)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        backend = str(getattr(settings, "STORE_BACKEND", "supabase")).lower()
        logger.info("Starting with settings=%s store=%s", settings_module, backend)
        if backend == "mysql":
            _bootstrap_mysql(settings)
        container = build_container(settings=settings)

    register_error_handlers(app)
    register_employees(app, container)
    register_leave(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        try:
            container.store.ping()
        except StoreError as e:
            logger.warning("Health check failed: %s", e)
            return jsonify({"status": "degraded", "store": container.store.backend, "error": e.to_dict()}), 503
        return jsonify({"status": "ok", "store": container.store.backend})

    @app.route("/api/me", methods=["GET"], endpoint="current_user")
    @actor_required(container)
    def current_user():
        return jsonify(g.actor.to_dict())

    return app
