from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .analytics.controller import register as register_analytics
from .container import build_container
from .core.settings import EngineSettings
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    engine_settings = EngineSettings.from_module(settings)
    logger.info(
        "settings=%s period=%s timezone=%s",
        settings_module,
        engine_settings.period_type.value,
        engine_settings.timezone_name or "naive",
    )

    container = build_container(engine_settings)
    app.extensions["shift_hours"] = container

    register_payroll(app, container)
    register_analytics(app, container)

    return app
