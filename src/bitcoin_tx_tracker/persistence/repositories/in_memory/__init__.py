"""In-memory repository implementations."""

from bitcoin_tx_tracker.persistence.repositories.in_memory.watched_account_repository import (
    InMemoryWatchedAccountRepository,
)

__all__ = ["InMemoryWatchedAccountRepository"]
