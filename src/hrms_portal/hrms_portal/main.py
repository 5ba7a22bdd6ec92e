from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .holidays.controller import register as register_holidays
from .leaves.controller import register as register_leaves
from .users.controller import register as register_users

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "LOG_LEVEL",
    "API_BASE_URL",
    "API_TIMEOUT_SECONDS",
    "REFRESH_INTERVAL_SECONDS",
    "BACKGROUND_REFRESH",
    "NOTIFICATIONS_ENABLED",
    "HISTORY_LIMIT",
)


def configure_logging(level: str) -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))


def create_app(overrides: Optional[dict[str, Any]] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    values = {name: getattr(settings, name) for name in SETTING_NAMES if hasattr(settings, name)}
    values.update(overrides or {})

    app.secret_key = values["SECRET_KEY"]
    app.config["DEBUG"] = bool(values.get("DEBUG", False))
    app.config["TESTING"] = bool(values.get("TESTING", False))
    # "Remember me" keeps the cookie session for a week.
    app.permanent_session_lifetime = timedelta(days=7)

    configure_logging(values.get("LOG_LEVEL", "INFO"))
    logger = logging.getLogger(__name__)
    logger.info("settings=%s api=%s", settings_module, values.get("API_BASE_URL"))

    container = container or build_container(settings=values)
    app.extensions["hrms_container"] = container

    register_users(app, container)
    register_attendance(app, container)
    register_holidays(app, container)
    register_leaves(app, container)

    return app


def run() -> None:
    app = create_app()
    app.run(debug=app.config["DEBUG"], use_reloader=False)
