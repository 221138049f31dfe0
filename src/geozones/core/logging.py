"""
Logging configuration.

We use a YAML logging config (`src/geozones/config/logging.yaml`) and then apply
runtime overrides from settings (e.g., `GEOZONES_LOG_LEVEL`).
"""

from __future__ import annotations

import logging.config

from geozones.config.settings import get_logging_config, get_settings


def configure_logging() -> None:
    """Configure the Python logging system based on packaged YAML config + settings."""
    settings = get_settings()
    config = dict(get_logging_config())

    level = settings.app.log_level.upper()
    config["root"] = {**config.get("root", {}), "level": level}
    handlers = {}
    for name, handler in config.get("handlers", {}).items():
        if isinstance(handler, dict) and "level" in handler:
            handler = {**handler, "level": level}
        handlers[name] = handler
    config["handlers"] = handlers

    logging.config.dictConfig(config)
