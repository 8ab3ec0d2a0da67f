"""WatchedAccount: domain entity for one registered user.

Identity is user_id (the Telegram chat id). Holds the tracked address, the
block-time cursor and the notifications still waiting for confirmation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, cast


@dataclass(frozen=True, slots=True)
class PendingEntry:
    """A notification sent for a transaction that was unconfirmed at send time."""

    message_id: int
    """Handle of the sent chat message (needed to edit it on confirmation)."""
    text: str
    """Exact body that was sent; the confirmed version is derived from it."""

    def to_dict(self) -> dict[str, Any]:
        return {"message_id": self.message_id, "text": self.text}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PendingEntry:
        return cls(message_id=int(data["message_id"]), text=str(data["text"]))


def _freeze(pending: Mapping[str, PendingEntry] | None) -> Mapping[str, PendingEntry]:
    return MappingProxyType(dict(pending or {}))


@dataclass(frozen=True, slots=True)
class WatchedAccount:
    """A user's watched address and reconciliation state.

    Invariants: cursor never decreases across successful cycles; a txid is in
    pending iff its pending-status notification was delivered and the
    confirmation edit has not been processed yet.
    """

    user_id: int
    address: str
    cursor: int
    """Unix seconds; confirmed transactions with block_time below it are already processed."""
    pending: Mapping[str, PendingEntry] = field(default_factory=lambda: _freeze(None))
    fee_threshold: int | None = None
    """sat/vB; a fee alert is sent while the medium fee is at or below it."""

    @classmethod
    def create(cls, user_id: int, address: str, *, now: float) -> WatchedAccount:
        """Create a freshly registered account (cursor = now, nothing pending)."""
        address = address.strip()
        if not address:
            raise ValueError("address must be non-empty")
        return cls(user_id=user_id, address=address, cursor=int(now), pending=_freeze(None))

    def with_progress(self, cursor: int, pending: Mapping[str, PendingEntry]) -> WatchedAccount:
        """Return a copy with the reconciliation state replaced."""
        return WatchedAccount(
            user_id=self.user_id,
            address=self.address,
            cursor=cursor,
            pending=_freeze(pending),
            fee_threshold=self.fee_threshold,
        )

    def with_address(self, address: str) -> WatchedAccount:
        """Return a copy watching another address.

        Pending entries belong to the previous address's history and could
        never be confirmed through the new one, so they are dropped.
        """
        return WatchedAccount(
            user_id=self.user_id,
            address=address.strip(),
            cursor=self.cursor,
            pending=_freeze(None),
            fee_threshold=self.fee_threshold,
        )

    def with_fee_threshold(self, fee_threshold: int | None) -> WatchedAccount:
        """Return a copy with the fee alert threshold set (None removes it)."""
        return WatchedAccount(
            user_id=self.user_id,
            address=self.address,
            cursor=self.cursor,
            pending=self.pending,
            fee_threshold=fee_threshold,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible dict (user_id is the key it is stored under)."""
        return {
            "address": self.address,
            "cursor": self.cursor,
            "pending": {txid: entry.to_dict() for txid, entry in self.pending.items()},
            "fee_threshold": self.fee_threshold,
        }

    @classmethod
    def from_dict(cls, user_id: int, data: dict[str, Any]) -> WatchedAccount:
        """Build from a dict produced by to_dict()."""
        pending_raw = data.get("pending") or {}
        pending = {
            str(txid): PendingEntry.from_dict(cast(dict[str, Any], entry))
            for txid, entry in cast(dict[str, Any], pending_raw).items()
        }
        threshold = data.get("fee_threshold")
        return cls(
            user_id=user_id,
            address=str(data["address"]),
            cursor=int(data["cursor"]),
            pending=_freeze(pending),
            fee_threshold=int(threshold) if threshold is not None else None,
        )
