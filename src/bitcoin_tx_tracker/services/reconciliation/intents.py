"""Notification intents produced by one reconciliation cycle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from bitcoin_tx_tracker.models.watched_account import WatchedAccount

IntentKind = Literal["send", "edit"]


@dataclass(frozen=True, slots=True)
class NotificationIntent:
    """One send or edit the engine dispatched, with its outcome."""

    kind: IntentKind
    txid: str
    text: str
    message_id: int | None
    """Handle returned by the send, or the handle that was edited. None if a send failed."""
    delivered: bool


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Updated account plus the intents dispatched while producing it."""

    account: WatchedAccount
    intents: tuple[NotificationIntent, ...] = ()

    @property
    def sends(self) -> tuple[NotificationIntent, ...]:
        return tuple(i for i in self.intents if i.kind == "send")

    @property
    def edits(self) -> tuple[NotificationIntent, ...]:
        return tuple(i for i in self.intents if i.kind == "edit")
