# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, json_file)."""

from bitcoin_tx_tracker.persistence.repositories.interfaces import (
    IWatchedAccountRepository,
)
from bitcoin_tx_tracker.persistence.repositories.in_memory import (
    InMemoryWatchedAccountRepository,
)
from bitcoin_tx_tracker.persistence.repositories.json_file import (
    JsonFileWatchedAccountRepository,
)

__all__ = [
    "IWatchedAccountRepository",
    "InMemoryWatchedAccountRepository",
    "JsonFileWatchedAccountRepository",
]
