# -*- coding: utf-8 -*-
"""UniSat indexer client."""

from bitcoin_tx_tracker.clients.unisat.unisat_api import UnisatApiClient

__all__ = ["UnisatApiClient"]
