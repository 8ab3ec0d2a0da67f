# -*- coding: utf-8 -*-
"""
Entry point for the Bitcoin transaction tracker bot.

Orchestrates: logging, settings, container, notifier, Telegram command polling,
tracking runner (transactions, fee alerts, input timeouts), shutdown (SIGINT or CancelledError).

Run with: bitcoin-tx-tracker  (or python -m bitcoin_tx_tracker.main)
"""
from __future__ import annotations

import asyncio
import signal
from typing import Any

import structlog
from telegram.ext import Application, ApplicationBuilder

from bitcoin_tx_tracker.DI import Container
from bitcoin_tx_tracker.config import Settings, get_settings
from bitcoin_tx_tracker.exceptions import MissingRequiredConfigError
from bitcoin_tx_tracker.logging.config import configure_logging


def _setup_sigint(shutdown_event: asyncio.Event) -> None:
    try:
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(
            signal.SIGINT,
            lambda: shutdown_event.set(),
        )
    except NotImplementedError:
        pass  # Windows has no add_signal_handler


def _validate_settings(settings: Settings, logger: Any) -> None:
    if settings.telegram.enabled and not settings.telegram.bot_token:
        logger.error(
            "main_missing_bot_token",
            message="TELEGRAM__BOT_TOKEN is not set",
        )
        raise MissingRequiredConfigError("TELEGRAM__BOT_TOKEN")


async def _start_polling(
    container: Container,
    settings: Settings,
    logger: Any,
) -> Application[Any, Any, Any, Any, Any, Any] | None:
    """Start the command surface. None when no bot token is configured (console mode)."""
    if not settings.telegram.bot_token:
        logger.warning("main_commands_disabled", message="No bot token; running alerts only")
        return None
    application = ApplicationBuilder().token(settings.telegram.bot_token).build()
    container.bot_handlers().register_handlers(application)
    await application.initialize()
    await application.start()
    if application.updater is not None:
        await application.updater.start_polling()
    logger.info("main_polling_started")
    return application


async def _stop_polling(application: Application[Any, Any, Any, Any, Any, Any] | None) -> None:
    if application is None:
        return
    if application.updater is not None and application.updater.running:
        await application.updater.stop()
    if application.running:
        await application.stop()
    await application.shutdown()


async def run() -> None:
    settings = get_settings()
    configure_logging(settings)
    logger = structlog.get_logger("main")
    _validate_settings(settings, logger)

    container = Container()
    repository = container.account_repository()
    notifier = container.notifier()
    http_client = container.http_client()
    runner = container.tracking_runner()

    accounts = await repository.list_all()
    logger.info(
        "main_registry_loaded",
        accounts_count=len(accounts),
        persistence_backend=settings.persistence.backend,
    )

    await notifier.initialize()
    application = await _start_polling(container, settings, logger)
    shutdown_event = asyncio.Event()
    _setup_sigint(shutdown_event)

    try:
        await runner.run(shutdown_event)
    finally:
        await _stop_polling(application)
        await notifier.shutdown()
        await http_client.aclose()
        logger.info("main_shutdown_complete")


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
