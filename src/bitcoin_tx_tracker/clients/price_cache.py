# -*- coding: utf-8 -*-
"""Short-lived cache for the BTC/USD price."""

from __future__ import annotations

import time
import structlog
from typing import Any, Callable, Optional
from cachetools import TTLCache

from bitcoin_tx_tracker.clients.mempool import MempoolApiClient
from bitcoin_tx_tracker.exceptions import UpstreamAPIError

_PRICE_KEY = "BTC-USD"


class PriceCache:
    """Cache for the BTC/USD rate so one polling cycle over many users fetches it once.

    Uses cachetools.TTLCache; a failed fetch is not cached and yields None,
    which callers treat as an unknown (zero) fiat value.
    """

    def __init__(
        self,
        mempool_client: MempoolApiClient,
        *,
        ttl_seconds: float = 30.0,
        timer: Callable[[], float] = time.monotonic,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the cache.

        Args:
            mempool_client: mempool.space client (injected).
            ttl_seconds: How long a fetched price is reused; 0 disables caching.
            timer: Clock used for expiry (injected for tests).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._client = mempool_client
        self._ttl_seconds = ttl_seconds
        self._cache: TTLCache[str, float] = TTLCache(
            maxsize=1, ttl=max(ttl_seconds, 0.001), timer=timer
        )
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def get_btc_price_usd(self) -> float | None:
        """Return the cached price, fetching it when missing or expired. None if unavailable."""
        if self._ttl_seconds > 0:
            cached = self._cache.get(_PRICE_KEY)
            if cached is not None:
                return cached
        try:
            price = await self._client.get_btc_price_usd()
        except UpstreamAPIError as e:
            self._logger.warning(
                "price_cache_fetch_failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return None
        if self._ttl_seconds > 0:
            self._cache[_PRICE_KEY] = price
        return price
