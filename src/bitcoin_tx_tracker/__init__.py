"""Bitcoin transaction tracker: Telegram alerts for watched addresses."""

from bitcoin_tx_tracker.clients import (
    AsyncHttpClient,
    MempoolApiClient,
    PriceCache,
    UnisatApiClient,
)
from bitcoin_tx_tracker.config import get_settings
from bitcoin_tx_tracker.DI import Container
from bitcoin_tx_tracker.services import ReconciliationEngine, TrackingRunner, TransactionTracker

__version__ = "0.1.0"
__all__ = [
    "AsyncHttpClient",
    "Container",
    "MempoolApiClient",
    "PriceCache",
    "ReconciliationEngine",
    "TrackingRunner",
    "TransactionTracker",
    "UnisatApiClient",
    "get_settings",
]
