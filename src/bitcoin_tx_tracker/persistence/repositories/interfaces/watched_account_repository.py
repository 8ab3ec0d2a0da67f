# -*- coding: utf-8 -*-
"""Abstract interface for watched account storage (in-memory, JSON file, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from bitcoin_tx_tracker.models.watched_account import WatchedAccount


class IWatchedAccountRepository(ABC):
    """Interface for persisting WatchedAccount (the user registry), keyed by user_id."""

    @abstractmethod
    async def get(self, user_id: int) -> Optional[WatchedAccount]:
        """Return the account of user_id, or None if not registered."""
        ...

    @abstractmethod
    async def save(self, account: WatchedAccount) -> None:
        """Insert or replace the account (by user_id)."""
        ...

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """Remove the account. Returns False if there was none."""
        ...

    @abstractmethod
    async def list_all(self) -> list[WatchedAccount]:
        """Return every registered account."""
        ...
