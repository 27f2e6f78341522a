"""
AI Validator - Logging

Applies LogSettings to the root logger for CLI and server entry points.
"""

import logging

from pythonjsonlogger import jsonlogger

from ai_validator.config import LogSettings


TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
JSON_FORMAT = "%(levelname)s %(name)s %(message)s"


def build_formatter(log_format: str) -> logging.Formatter:
    """Text formatter, or one JSON object per line with a UTC timestamp."""
    if log_format == "json":
        return jsonlogger.JsonFormatter(
            JSON_FORMAT,
            rename_fields={"levelname": "level", "name": "logger"},
            timestamp=True,
        )
    return logging.Formatter(TEXT_FORMAT)


def configure_logging(log_settings: LogSettings = None) -> None:
    """Configure root logging from settings (idempotent)."""
    log_settings = log_settings or LogSettings()

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(log_settings.format))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_settings.level)
