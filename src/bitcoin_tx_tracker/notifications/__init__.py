"""Notification subsystem."""

from bitcoin_tx_tracker.notifications.strategies import (
    BaseNotificationStrategy,
    ConsoleNotifier,
    TelegramNotifier,
)
from bitcoin_tx_tracker.notifications.stylers import (
    CONFIRMED_MARKER,
    PENDING_MARKER,
    MessageStyler,
)

__all__ = [
    "BaseNotificationStrategy",
    "CONFIRMED_MARKER",
    "ConsoleNotifier",
    "MessageStyler",
    "PENDING_MARKER",
    "TelegramNotifier",
]
