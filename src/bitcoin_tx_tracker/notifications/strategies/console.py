# -*- coding: utf-8 -*-
"""Console notifier (print-based)."""

from __future__ import annotations

import itertools

from bitcoin_tx_tracker.notifications.strategies.base import BaseNotificationStrategy
from bitcoin_tx_tracker.config import Settings


class ConsoleNotifier(BaseNotificationStrategy):
    """Print messages to stdout; handles are a local counter."""

    def __init__(self, settings: "Settings") -> None:
        super().__init__(settings)
        self._running = False
        self._ids = itertools.count(1)

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send_message(self, chat_id: int, text: str) -> int | None:
        if not self.is_running:
            return None
        message_id = next(self._ids)
        print(f"[{chat_id}#{message_id}] {text}")
        return message_id

    async def edit_message(self, chat_id: int, message_id: int, text: str) -> bool:
        if not self.is_running:
            return False
        print(f"[{chat_id}#{message_id} edited] {text}")
        return True
