from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .core.enums import StorageBackend
from .database.bootstrap import apply_schema, list_tables
from .toil.controller import register as register_toil

logger = logging.getLogger("toil_system")


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    backend = str(getattr(settings, "STORAGE_BACKEND", StorageBackend.MYSQL.value))
    db_config = getattr(settings, "DB_CONFIG", None)
    logger.info(
        "settings=%s backend=%s db=%s@%s:%s/%s",
        settings_module, backend,
        (db_config or {}).get("user"), (db_config or {}).get("host"),
        (db_config or {}).get("port", 3306), (db_config or {}).get("database"),
    )

    if backend == StorageBackend.MYSQL.value and bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        db_config=db_config,
        toil_policy=getattr(settings, "TOIL_POLICY", None),
        backend=backend,
    )
    app.extensions["toil_container"] = container

    register_toil(app, container)

    return app
