from __future__ import annotations

import importlib
import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendees.controller import register as register_attendees
from .container import build_container, build_repository
from .core.logging import setup_logging
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DatabaseConnection, DBConfig
from .tunnel.service import TunnelService

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app() -> Flask:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))

    public_dir = str(getattr(settings, "PUBLIC_DIR"))
    app = Flask(__name__, static_folder=public_dir, static_url_path="")
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PORT"] = int(getattr(settings, "PORT", 3000))
    app.config["PUBLIC_DIR"] = public_dir

    store_backend = str(getattr(settings, "STORE_BACKEND", "json"))
    db_config = getattr(settings, "DB_CONFIG", None)
    logger.info("settings=%s store=%s", settings_module, store_backend)

    if store_backend == "mysql" and getattr(settings, "AUTO_INIT_DB", False):
        conn = DatabaseConnection(DBConfig.from_mapping(db_config))
        apply_schema(conn, schema_path=SCHEMA_PATH)
        logger.info("MySQL schema ready (tables=%d)", len(list_tables(conn)))

    repo = build_repository(
        store_backend=store_backend,
        db_file=getattr(settings, "DB_FILE", None),
        db_config=db_config,
    )

    tunnel = None
    if getattr(settings, "TUNNEL_ENABLED", False):
        tunnel = TunnelService(
            port=app.config["PORT"],
            host=getattr(settings, "TUNNEL_HOST", "nokey@localhost.run"),
            retry_seconds=getattr(settings, "TUNNEL_RETRY_SECONDS", 5),
        )

    container = build_container(attendees_repo=repo, tunnel_service=tunnel)
    app.extensions["checkin_container"] = container

    register_attendees(app, container)
    return app


def run() -> None:
    app = create_app()
    port = app.config["PORT"]
    container = app.extensions["checkin_container"]

    # The debug reloader imports the app twice; start the tunnel in the serving process only.
    if container.tunnel_service and (not app.debug or os.environ.get("WERKZEUG_RUN_MAIN") == "true"):
        container.tunnel_service.start()

    logger.info("Serving on http://localhost:%d", port)
    app.run(host="0.0.0.0", port=port, debug=app.debug)


if __name__ == "__main__":
    run()
