"""Account (user registry) services."""

from bitcoin_tx_tracker.services.accounts.account_service import AccountService

__all__ = ["AccountService"]
