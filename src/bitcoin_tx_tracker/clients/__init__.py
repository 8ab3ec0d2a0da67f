"""HTTP and API clients."""

from bitcoin_tx_tracker.clients.http import AsyncHttpClient
from bitcoin_tx_tracker.clients.mempool import MempoolApiClient
from bitcoin_tx_tracker.clients.price_cache import PriceCache
from bitcoin_tx_tracker.clients.unisat import UnisatApiClient

__all__ = [
    "AsyncHttpClient",
    "MempoolApiClient",
    "PriceCache",
    "UnisatApiClient",
]
