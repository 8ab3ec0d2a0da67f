"""Persistence layer (repositories)."""

from bitcoin_tx_tracker.persistence.repositories import (
    InMemoryWatchedAccountRepository,
    IWatchedAccountRepository,
    JsonFileWatchedAccountRepository,
)

__all__ = [
    "IWatchedAccountRepository",
    "InMemoryWatchedAccountRepository",
    "JsonFileWatchedAccountRepository",
]
