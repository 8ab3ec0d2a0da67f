# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/, json_file/."""

from bitcoin_tx_tracker.persistence.repositories.interfaces.watched_account_repository import (
    IWatchedAccountRepository,
)

__all__ = ["IWatchedAccountRepository"]
