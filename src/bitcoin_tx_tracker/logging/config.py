# -*- coding: utf-8 -*-
"""Logging configuration for structlog + Logfire."""

from __future__ import annotations

import logging
import logfire
import structlog
from typing import Any
from structlog.types import EventDict, Processor
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from bitcoin_tx_tracker.config import AppSettings, LoggingSettings, Settings, get_settings

# Logfire spells two of the stdlib level names differently
_LOGFIRE_LEVEL_NAMES: dict[str, str] = {"WARNING": "warn", "CRITICAL": "fatal"}

# Telegram long polling logs every getUpdates request at INFO
_NOISY_LOGGERS: tuple[str, ...] = ("httpx", "telegram.ext.Updater")


def _service_context(app: AppSettings) -> Processor:
    """Build a processor stamping logger name and service identity on every event."""
    context: dict[str, str] = {"app_name": app.app_name, "environment": app.environment}
    if app.service_name:
        context["service_name"] = app.service_name
    if app.service_version:
        context["service_version"] = app.service_version

    def add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        stdlib_logger = getattr(logger, "_logger", None)
        event_dict["logger"] = getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
        event_dict.update(context)
        return event_dict

    return add_service_context


def _handlers(settings: LoggingSettings) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if settings.log_to_console:
        console = logging.StreamHandler()
        console.setLevel(settings.console_level)
        handlers.append(console)
    if settings.log_to_file:
        path = Path(settings.log_file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        # One file per UTC day
        rotating = TimedRotatingFileHandler(
            path,
            when="midnight",
            backupCount=settings.log_file_backup_count,
            encoding="utf-8",
            utc=True,
        )
        rotating.setLevel(settings.file_level)
        handlers.append(rotating)
    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers


def configure_logging(settings: Settings | None = None) -> None:
    """Configure stdlib handlers, structlog and (optionally) Logfire from settings."""
    settings = settings or get_settings()
    app, log = settings.app, settings.logging

    handlers = _handlers(log)
    if handlers:
        logging.basicConfig(level=min(h.level for h in handlers), handlers=handlers)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context(app),
    ]

    if log.logfire_enabled:
        logfire.configure(
            token=log.logfire_token,
            service_name=app.service_name or app.app_name,
            service_version=app.service_version,
            min_level=_LOGFIRE_LEVEL_NAMES.get(log.logfire_level, log.logfire_level.lower()),  # type: ignore[arg-type]
            environment=app.environment,
        )
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]

    # Files are always JSON
    if handlers:
        use_json = log.log_to_file or log.json_format
        processors.append(structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
