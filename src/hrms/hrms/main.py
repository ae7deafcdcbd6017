from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import ApiJSONProvider, register_error_handlers
from .container import Container, build_container
from .core.logging import configure_logging
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .database.connection import DBConfig

from .allowances.controller import register as register_allowances
from .appraisals.controller import register as register_appraisals
from .ctc.controller import register as register_ctc
from .departments.controller import register as register_departments
from .employees.controller import register as register_employees
from .helpdesk.controller import register as register_helpdesk
from .holidays.controller import register as register_holidays
from .leaves.controller import register as register_leaves
from .ltc.controller import register as register_ltc
from .messages.controller import register as register_messages
from .notifications.controller import register as register_notifications
from .salaries.controller import register as register_salaries
from .travel.controller import register as register_travel
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)
    app.json = ApiJSONProvider(app)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), json_format=getattr(settings, "LOG_JSON", False))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    db_config = getattr(settings, "DB_CONFIG")

    if container is None:
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        container = build_container(db_config=db_config)

    register_error_handlers(app)
    register_users(app, container)
    register_departments(app, container)
    register_employees(app, container)
    register_leaves(app, container)
    register_salaries(app, container)
    register_allowances(app, container)
    register_ctc(app, container)
    register_appraisals(app, container)
    register_helpdesk(app, container)
    register_messages(app, container)
    register_notifications(app, container)
    register_holidays(app, container)
    register_ltc(app, container)
    register_travel(app, container)

    return app
