"""Message stylers."""

from bitcoin_tx_tracker.notifications.stylers.message_styler import (
    CONFIRMED_MARKER,
    PENDING_MARKER,
    MessageStyler,
)

__all__ = ["CONFIRMED_MARKER", "PENDING_MARKER", "MessageStyler"]
