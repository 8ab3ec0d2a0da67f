"""JSON-file repository implementations."""

from bitcoin_tx_tracker.persistence.repositories.json_file.watched_account_repository import (
    JsonFileWatchedAccountRepository,
)

__all__ = ["JsonFileWatchedAccountRepository"]
