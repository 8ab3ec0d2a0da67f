"""Token balance services."""

from bitcoin_tx_tracker.services.balances.token_balance_service import TokenBalanceService

__all__ = ["TokenBalanceService"]
