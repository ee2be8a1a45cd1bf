from __future__ import annotations

import logging
import logging.config
from typing import Any, Optional

from flask import Flask

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .ingestion.controller import register as register_ingestion
from .reporting.controller import register as register_reporting
from .settings import EngineSettings

logger = logging.getLogger(__name__)


def create_app(settings: Any = None, *, container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    ``settings`` is a ``config.<env>`` module (or an ``EngineSettings``);
    tests pass a ready ``container`` built over in-memory repositories.
    """

    engine = settings if isinstance(settings, EngineSettings) else EngineSettings.from_module(settings)
    logging.config.dictConfig(engine.logging_config())

    app = Flask(__name__)
    app.config["DEBUG"] = engine.debug
    app.config["MAX_UPLOAD_FILES"] = engine.max_upload_files

    if container is None:
        db_config = engine.db_config
        if engine.auto_init_db:
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(db_config=db_config, engine=engine)
        logger.info(
            "Using database %s@%s:%s/%s",
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

    app.extensions["hr_attendance"] = container

    register_ingestion(app, container)
    register_attendance(app, container)
    register_reporting(app, container)

    return app
