"""Notification strategies."""

from bitcoin_tx_tracker.notifications.strategies.base import (
    BaseNotificationStrategy,
)
from bitcoin_tx_tracker.notifications.strategies.console import ConsoleNotifier
from bitcoin_tx_tracker.notifications.strategies.telegram import TelegramNotifier

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "TelegramNotifier",
]
