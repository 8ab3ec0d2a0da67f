"""Per-user interactive input state (explicit FSM with expiry)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ConversationState(str, Enum):
    """What the bot expects from the user's next free-text message."""

    IDLE = "idle"
    """No pending input."""
    AWAITING_ADDRESS = "awaiting_address"
    """/register: waiting for the address to watch."""
    AWAITING_EDIT = "awaiting_edit"
    """/edit: waiting for the replacement address."""
    AWAITING_THRESHOLD = "awaiting_threshold"
    """/set_gas: waiting for the fee threshold."""


@dataclass(frozen=True, slots=True)
class PendingInput:
    """An interactive command waiting for a reply until expires_at (unix seconds)."""

    user_id: int
    state: ConversationState
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at
