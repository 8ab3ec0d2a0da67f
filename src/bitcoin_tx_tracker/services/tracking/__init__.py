"""Transaction tracking services."""

from bitcoin_tx_tracker.services.tracking.tracker import CycleOutcome, TransactionTracker
from bitcoin_tx_tracker.services.tracking.tracking_runner import TrackingRunner

__all__ = ["CycleOutcome", "TrackingRunner", "TransactionTracker"]
