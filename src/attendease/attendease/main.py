from __future__ import annotations

import importlib
from typing import Optional

import httpx
import structlog
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .leave.controller import register as register_leave
from .logging import setup_logging
from .users.controller import register as register_users

log = structlog.get_logger(__name__)


def create_app(*, transport: Optional[httpx.AsyncBaseTransport] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    api_config = getattr(settings, "API_CONFIG")

    setup_logging(getattr(settings, "LOG_LEVEL", None))
    log.info("app.starting", settings=settings_module, api=api_config.get("base_url"))

    container = build_container(api_config=api_config, transport=transport)

    register_users(app, container)
    register_attendance(app, container)
    register_leave(app, container)

    return app
