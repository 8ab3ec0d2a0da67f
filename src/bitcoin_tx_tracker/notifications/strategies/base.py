# -*- coding: utf-8 -*-
"""Base notification strategy: the chat transport port."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from bitcoin_tx_tracker.config.config import Settings


class BaseNotificationStrategy(ABC):
    """Abstract chat transport: send a message, edit it later by handle.

    Implementations never raise on delivery failure; they log it and report it
    through the return value so callers can decide whether to retry next cycle.
    """

    def __init__(self, settings: "Settings"):
        """
        Initialize the strategy.

        Args:
            settings: Global configuration (Settings).
        """
        self.settings = settings

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """Whether the strategy has been initialized and not shut down."""
        pass

    @abstractmethod
    async def initialize(self) -> None:
        """Open the transport."""
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        """Close the transport."""
        pass

    @abstractmethod
    async def send_message(self, chat_id: int, text: str) -> int | None:
        """
        Send a Markdown message.

        Args:
            chat_id: Destination chat (the user id).
            text: Message body.

        Returns:
            The message handle, or None if delivery failed.
        """
        pass

    @abstractmethod
    async def edit_message(self, chat_id: int, message_id: int, text: str) -> bool:
        """
        Replace the body of a previously sent message.

        Returns:
            True if the message now shows text.
        """
        pass
