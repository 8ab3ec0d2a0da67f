# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest

from bitcoin_tx_tracker.models.watched_account import PendingEntry, WatchedAccount
from bitcoin_tx_tracker.notifications.strategies.base import BaseNotificationStrategy
from bitcoin_tx_tracker.notifications.stylers.message_styler import MessageStyler
from bitcoin_tx_tracker.persistence.repositories.in_memory import InMemoryWatchedAccountRepository
from bitcoin_tx_tracker.utils.locks import KeyedLocks


class RecordingNotifier(BaseNotificationStrategy):
    """Chat transport fake: records sends/edits; failures can be switched on per kind."""

    def __init__(self) -> None:
        super().__init__(settings=SimpleNamespace())
        self.sent: list[tuple[int, str]] = []
        self.edited: list[tuple[int, int, str]] = []
        self.fail_sends = False
        self.fail_edits = False
        self._next_id = 100
        self._running = True

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send_message(self, chat_id: int, text: str) -> int | None:
        if self.fail_sends:
            return None
        self.sent.append((chat_id, text))
        self._next_id += 1
        return self._next_id

    async def edit_message(self, chat_id: int, message_id: int, text: str) -> bool:
        if self.fail_edits:
            return False
        self.edited.append((chat_id, message_id, text))
        return True

    def texts_to(self, chat_id: int) -> list[str]:
        return [text for cid, text in self.sent if cid == chat_id]


class FakeClock:
    """Settable unix clock."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def address() -> str:
    """Default watched address used by tests."""
    return "bc1qxy2kgdygjrsqtzq2n0yrf2493p83kkfjhx0wlh"


@pytest.fixture
def other_address() -> str:
    """A second valid address (counterparty / replacement)."""
    return "bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq"


@pytest.fixture
def user_id() -> int:
    return 4242


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def styler() -> MessageStyler:
    return MessageStyler()


@pytest.fixture
def locks() -> KeyedLocks:
    return KeyedLocks()


@pytest.fixture
def repo() -> InMemoryWatchedAccountRepository:
    """Fresh in-memory user registry per test."""
    return InMemoryWatchedAccountRepository()


@pytest.fixture
def account_factory(user_id: int, address: str) -> Callable[..., WatchedAccount]:
    """Build WatchedAccount with sensible defaults and easy overrides."""

    def _build(**overrides: Any) -> WatchedAccount:
        pending: dict[str, PendingEntry] = overrides.pop("pending", {})
        account = WatchedAccount.create(
            overrides.pop("user_id", user_id),
            overrides.pop("address", address),
            now=overrides.pop("cursor", 1_000),
        )
        account = account.with_progress(account.cursor, pending)
        return account.with_fee_threshold(overrides.pop("fee_threshold", None))

    return _build


@pytest.fixture
def tx_factory(address: str, other_address: str) -> Callable[..., dict[str, Any]]:
    """Build a mempool.space transaction item.

    sender/receiver default to other_address -> address (incoming).
    """

    def _build(
        txid: str,
        *,
        confirmed: bool = True,
        block_time: int | None = None,
        sender: str | None = None,
        receiver: str | None = None,
        value: int = 5_000_000_000,
        input_value: int | None = None,
        extra_outputs: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        status: dict[str, Any] = {"confirmed": confirmed}
        if confirmed:
            status["block_time"] = block_time
        return {
            "txid": txid,
            "status": status,
            "vin": [
                {
                    "prevout": {
                        "scriptpubkey_address": sender or other_address,
                        "value": input_value if input_value is not None else value,
                    }
                }
            ],
            "vout": [{"scriptpubkey_address": receiver or address, "value": value}]
            + list(extra_outputs or []),
        }

    return _build
