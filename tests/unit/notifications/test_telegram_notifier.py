# -*- coding: utf-8 -*-
"""Unit tests for TelegramNotifier delivery semantics (bot faked)."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest
from telegram.error import BadRequest, Forbidden, RetryAfter, TimedOut

from bitcoin_tx_tracker.notifications.strategies.telegram import TelegramNotifier


def _settings(**overrides: Any) -> Any:
    telegram = {
        "enabled": True,
        "bot_token": "123:abc",
        "max_retries": 3,
        "backoff_base_seconds": 0.1,
        "connect_timeout": 1.0,
        "read_timeout": 1.0,
        "write_timeout": 1.0,
        "pool_timeout": 1.0,
    }
    telegram.update(overrides)
    return SimpleNamespace(telegram=SimpleNamespace(**telegram))


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    sleep = AsyncMock()
    monkeypatch.setattr("bitcoin_tx_tracker.notifications.strategies.telegram.asyncio.sleep", sleep)
    return sleep


def _notifier(bot: Any) -> TelegramNotifier:
    notifier = TelegramNotifier(_settings())
    notifier._bot = bot
    notifier._running = True
    return notifier


def test_requires_token() -> None:
    with pytest.raises(ValueError):
        TelegramNotifier(_settings(bot_token=None))


async def test_send_returns_message_handle() -> None:
    bot: Any = SimpleNamespace(send_message=AsyncMock(return_value=SimpleNamespace(message_id=55)))

    assert await _notifier(bot).send_message(1, "hi") == 55
    kwargs = bot.send_message.await_args.kwargs
    assert kwargs["chat_id"] == 1
    assert kwargs["parse_mode"] == "Markdown"


async def test_send_gives_up_on_forbidden(no_sleep: AsyncMock) -> None:
    bot: Any = SimpleNamespace(send_message=AsyncMock(side_effect=Forbidden("bot was blocked by the user")))

    assert await _notifier(bot).send_message(1, "hi") is None
    assert bot.send_message.await_count == 1


async def test_send_retries_transient_errors(no_sleep: AsyncMock) -> None:
    bot: Any = SimpleNamespace(
        send_message=AsyncMock(
            side_effect=[TimedOut(), RetryAfter(2), SimpleNamespace(message_id=9)]
        )
    )

    assert await _notifier(bot).send_message(1, "hi") == 9
    assert no_sleep.await_count == 2


async def test_send_fails_after_max_retries(no_sleep: AsyncMock) -> None:
    bot: Any = SimpleNamespace(send_message=AsyncMock(side_effect=TimedOut()))

    assert await _notifier(bot).send_message(1, "hi") is None
    assert bot.send_message.await_count == 3


async def test_edit_not_modified_counts_as_delivered() -> None:
    bot: Any = SimpleNamespace(
        edit_message_text=AsyncMock(side_effect=BadRequest("Message is not modified: specified new message content"))
    )

    assert await _notifier(bot).edit_message(1, 2, "same") is True


async def test_edit_other_bad_request_fails() -> None:
    bot: Any = SimpleNamespace(edit_message_text=AsyncMock(side_effect=BadRequest("Message to edit not found")))

    assert await _notifier(bot).edit_message(1, 2, "x") is False


async def test_not_running_does_not_send() -> None:
    notifier = TelegramNotifier(_settings())

    assert await notifier.send_message(1, "hi") is None
    assert await notifier.edit_message(1, 2, "hi") is False
