# -*- coding: utf-8 -*-
"""Telegram notification strategy (async)."""

from __future__ import annotations

import asyncio
import structlog
from typing import Any, Awaitable, Callable, Optional, TYPE_CHECKING, TypeVar

from telegram import Bot, LinkPreviewOptions
from telegram.constants import ParseMode
from telegram.error import (
    BadRequest,
    Forbidden,
    NetworkError,
    RetryAfter,
    TelegramError,
    TimedOut,
)
from telegram.request import HTTPXRequest

from bitcoin_tx_tracker.notifications.strategies.base import BaseNotificationStrategy

if TYPE_CHECKING:
    from bitcoin_tx_tracker.config.config import Settings

T = TypeVar("T")

_NO_PREVIEW = LinkPreviewOptions(is_disabled=True)


class TelegramNotifier(BaseNotificationStrategy):
    """Send and edit chat messages using python-telegram-bot."""

    def __init__(
        self,
        settings: "Settings",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(settings)
        self._logger = get_logger(logger_name or self.__class__.__name__)

        cfg = self.settings.telegram
        if not cfg.enabled or not cfg.bot_token:
            raise ValueError("TelegramNotifier requires telegram.enabled and a bot token.")

        self.token: str = str(cfg.bot_token)
        self.max_retries = cfg.max_retries
        self.backoff_base_seconds = cfg.backoff_base_seconds

        self.connect_timeout = cfg.connect_timeout
        self.read_timeout = cfg.read_timeout
        self.write_timeout = cfg.write_timeout
        self.pool_timeout = cfg.pool_timeout

        self._bot: Optional[Bot] = None
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        if self._running:
            self._logger.warning("telegram_already_running")
            return

        request = HTTPXRequest(
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            write_timeout=self.write_timeout,
            pool_timeout=self.pool_timeout,
        )
        self._bot = Bot(token=self.token, request=request)
        await self._bot.initialize()
        self._running = True

    async def shutdown(self) -> None:
        if not self._running:
            return

        if self._bot is not None:
            await self._bot.shutdown()
        self._bot = None
        self._running = False

    async def send_message(self, chat_id: int, text: str) -> int | None:
        bot = self._bot
        if bot is None or not self._running:
            self._logger.warning("telegram_not_running_cannot_send", telegram_chat_id=chat_id)
            return None

        async def _send() -> int:
            message = await bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=ParseMode.MARKDOWN,
                link_preview_options=_NO_PREVIEW,
            )
            return message.message_id

        message_id = await self._with_retries("send", chat_id, _send)
        if message_id is not None:
            self._logger.debug(
                "telegram_message_sent",
                telegram_chat_id=chat_id,
                telegram_message_id=message_id,
            )
        return message_id

    async def edit_message(self, chat_id: int, message_id: int, text: str) -> bool:
        bot = self._bot
        if bot is None or not self._running:
            self._logger.warning("telegram_not_running_cannot_edit", telegram_chat_id=chat_id)
            return False

        async def _edit() -> bool:
            try:
                await bot.edit_message_text(
                    text=text,
                    chat_id=chat_id,
                    message_id=message_id,
                    parse_mode=ParseMode.MARKDOWN,
                    link_preview_options=_NO_PREVIEW,
                )
            except BadRequest as exc:
                # Re-editing with identical text (a retried confirmation) is already the desired state.
                if "not modified" in str(exc).lower():
                    return True
                raise
            return True

        return bool(await self._with_retries("edit", chat_id, _edit))

    async def _with_retries(
        self,
        operation: str,
        chat_id: int,
        call: Callable[[], Awaitable[T]],
    ) -> T | None:
        """Run call, retrying transient Telegram errors. Returns None when delivery failed."""
        attempt = 1
        while attempt <= self.max_retries:
            try:
                return await call()
            except RetryAfter as exc:
                retry_after = exc.retry_after
                retry_seconds = (
                    retry_after.total_seconds()
                    if hasattr(retry_after, "total_seconds")
                    else float(retry_after)
                )
                self._logger.warning(
                    "telegram_rate_limit_retry_after",
                    telegram_operation=operation,
                    retry_seconds=retry_seconds,
                )
                await asyncio.sleep(retry_seconds)
            except (BadRequest, Forbidden) as exc:
                self._logger.error(
                    "telegram_fatal_error",
                    telegram_operation=operation,
                    telegram_chat_id=chat_id,
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
                return None
            except (NetworkError, TimedOut, TelegramError) as exc:
                backoff = min(60.0, self.backoff_base_seconds * (2 ** (attempt - 1)))
                self._logger.warning(
                    "telegram_error_retry",
                    telegram_operation=operation,
                    error_type=type(exc).__name__,
                    attempt=attempt,
                    max_retries=self.max_retries,
                    backoff_seconds=backoff,
                )
                await asyncio.sleep(backoff)
            attempt += 1

        self._logger.error(
            "telegram_max_retries_exceeded",
            telegram_operation=operation,
            telegram_chat_id=chat_id,
        )
        return None
