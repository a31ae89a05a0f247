from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

import structlog
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .clock.controller import register as register_clock
from .common.http import register_error_handlers
from .common.logging import register_request_context, setup_logging
from .container import Container, build_container
from .corrections.controller import register as register_corrections
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .summaries.controller import register as register_summaries
from .team.controller import register as register_team

logger = structlog.get_logger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    setup_logging(str(getattr(settings, "LOG_LEVEL", "INFO")), json=bool(getattr(settings, "LOG_JSON", True)))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "app_starting",
            settings=settings_module,
            db=f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema_ready", tables=len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            seed_path = Path(__file__).resolve().parents[3] / "database" / "seed.sql"
            apply_seed_sql(db_config, seed_path=seed_path)
            logger.info("demo_seed_ready")

        container = build_container(db_config=db_config, settings=settings)

    register_request_context(app)
    register_error_handlers(app)
    register_clock(app, container)
    register_summaries(app, container)
    register_corrections(app, container)
    register_team(app, container)

    return app
