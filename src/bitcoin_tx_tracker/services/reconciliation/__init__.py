"""Transaction reconciliation."""

from bitcoin_tx_tracker.services.reconciliation.engine import ReconciliationEngine
from bitcoin_tx_tracker.services.reconciliation.intents import (
    NotificationIntent,
    ReconcileResult,
)

__all__ = [
    "NotificationIntent",
    "ReconcileResult",
    "ReconciliationEngine",
]
