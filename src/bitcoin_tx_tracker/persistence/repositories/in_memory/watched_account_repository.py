# -*- coding: utf-8 -*-
"""In-memory watched account repository (keyed by user_id)."""

from __future__ import annotations

from bitcoin_tx_tracker.models.watched_account import WatchedAccount
from bitcoin_tx_tracker.persistence.repositories.interfaces.watched_account_repository import (
    IWatchedAccountRepository,
)


class InMemoryWatchedAccountRepository(IWatchedAccountRepository):
    """In-memory implementation of IWatchedAccountRepository."""

    def __init__(self, accounts: list[WatchedAccount] | None = None) -> None:
        """Initialize the store, optionally pre-populated."""
        self._store: dict[int, WatchedAccount] = {a.user_id: a for a in accounts or []}

    async def get(self, user_id: int) -> WatchedAccount | None:
        return self._store.get(user_id)

    async def save(self, account: WatchedAccount) -> None:
        self._store[account.user_id] = account

    async def delete(self, user_id: int) -> bool:
        return self._store.pop(user_id, None) is not None

    async def list_all(self) -> list[WatchedAccount]:
        return list(self._store.values())
