# -*- coding: utf-8 -*-
"""mempool.space client."""

from bitcoin_tx_tracker.clients.mempool.mempool_api import MempoolApiClient

__all__ = ["MempoolApiClient"]
